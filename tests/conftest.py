"""
Pytest configuration for HotPay AnyChain backend tests.

Sets up the test environment and global fixtures, including an in-memory
stand-in for the Supabase client that understands the query-builder calls
the services make (select/insert/update/delete, eq/in_/or_, order) and
enforces the foreign keys of sql/hotpay_schema.sql.
"""
import copy
import os
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from unittest.mock import MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-service-key")
os.environ.setdefault("SEED_DEMO_DATA", "false")

from postgrest.exceptions import APIError  # noqa: E402


# (child table, column, parent table)
FOREIGN_KEYS = [
    ("invoices", "merchant_id", "merchants"),
    ("supported_payment_options", "merchant_id", "merchants"),
    ("payments", "invoice_id", "invoices"),
]


class MockSupabaseResponse:
    """Mimics the APIResponse returned by execute()."""

    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data
        self.count = None


def _split_or_conditions(filters: str) -> List[str]:
    """Split a PostgREST or-filter on commas outside double quotes."""
    parts: List[str] = []
    current = []
    in_quotes = False
    escaped = False
    for char in filters:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            current.append(char)
            escaped = True
        elif char == '"':
            current.append(char)
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _unquote(value: str) -> str:
    if not (len(value) >= 2 and value.startswith('"') and value.endswith('"')):
        return value
    inner = value[1:-1]
    out = []
    i = 0
    while i < len(inner):
        if inner[i] == "\\" and i + 1 < len(inner):
            out.append(inner[i + 1])
            i += 2
        else:
            out.append(inner[i])
            i += 1
    return "".join(out)


def _like_to_regex(pattern: str) -> str:
    """Translate a LIKE pattern (backslash escape) to a regex.

    Like PostgREST, every `*` is read as `%` before the pattern reaches SQL.
    """
    pattern = pattern.replace("*", "%")
    out = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\" and i + 1 < len(pattern):
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if char == "%":
            out.append(".*")
        elif char == "_":
            out.append(".")
        else:
            out.append(re.escape(char))
        i += 1
    return "".join(out)


def _condition(column: str, operator: str, value: str) -> Callable[[Dict[str, Any]], bool]:
    if operator == "ilike":
        regex = re.compile(_like_to_regex(value), re.IGNORECASE | re.DOTALL)
        return lambda row: row.get(column) is not None and bool(regex.fullmatch(str(row[column])))
    if operator == "eq":
        return lambda row: row.get(column) is not None and str(row[column]) == value
    raise NotImplementedError(f"or_ operator {operator!r} not supported by fake client")


class FakeQuery:
    """One chained request against a FakeSupabaseClient table."""

    def __init__(self, db: "FakeSupabaseClient", table: str):
        self._db = db
        self._table = table
        self._op = "select"
        self._columns: Optional[List[Tuple[str, bool]]] = None
        self._payload: Any = None
        self._filters: List[Callable[[Dict[str, Any]], bool]] = []
        self._orders: List[Tuple[str, bool]] = []

    # --- operations ---

    def select(self, columns: str = "*"):
        self._op = "select"
        if columns.strip() != "*":
            parsed = []
            for column in columns.split(","):
                name, _, cast = column.strip().partition("::")
                parsed.append((name, cast == "text"))
            self._columns = parsed
        return self

    def insert(self, payload: Any):
        self._op = "insert"
        self._payload = payload
        return self

    def update(self, payload: Dict[str, Any]):
        self._op = "update"
        self._payload = payload
        return self

    def delete(self):
        self._op = "delete"
        return self

    # --- filters ---

    def eq(self, column: str, value: Any):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values: List[Any]):
        allowed = list(values)
        self._filters.append(lambda row: row.get(column) in allowed)
        return self

    def or_(self, filters: str):
        conditions = []
        for part in _split_or_conditions(filters):
            column, operator, value = part.split(".", 2)
            conditions.append(_condition(column, operator, _unquote(value)))
        self._filters.append(lambda row: any(cond(row) for cond in conditions))
        return self

    def order(self, column: str, desc: bool = False):
        self._orders.append((column, desc))
        return self

    # --- execution ---

    def _matching(self) -> List[Dict[str, Any]]:
        rows = self._db.tables[self._table]
        return [row for row in rows if all(f(row) for f in self._filters)]

    def _project(self, row: Dict[str, Any]) -> Dict[str, Any]:
        if self._columns is None:
            return copy.deepcopy(row)
        projected = {}
        for name, as_text in self._columns:
            value = row.get(name)
            projected[name] = str(value) if as_text and value is not None else copy.deepcopy(value)
        return projected

    def _sorted(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        # Stable sorts from the last key to the first; nulls last asc, first desc
        for column, desc in reversed(self._orders):
            rows = sorted(
                rows,
                key=lambda row: (row.get(column) is None, row.get(column)),
                reverse=desc,
            )
        return rows

    def execute(self) -> MockSupabaseResponse:
        self._db.executed.append((self._table, self._op))

        if self._op == "select":
            return MockSupabaseResponse([self._project(r) for r in self._sorted(self._matching())])

        if self._op == "insert":
            new_rows = self._payload if isinstance(self._payload, list) else [self._payload]
            for row in new_rows:
                self._db.check_parent_exists(self._table, row)
            stored = [copy.deepcopy(row) for row in new_rows]
            self._db.tables[self._table].extend(stored)
            return MockSupabaseResponse(copy.deepcopy(stored))

        if self._op == "update":
            targets = self._matching()
            for row in targets:
                self._db.check_parent_exists(self._table, {**row, **self._payload})
            for row in targets:
                row.update(copy.deepcopy(self._payload))
            return MockSupabaseResponse(copy.deepcopy(targets))

        if self._op == "delete":
            targets = self._matching()
            for row in targets:
                self._db.check_no_children(self._table, row)
            target_ids = {id(row) for row in targets}
            self._db.tables[self._table] = [
                row for row in self._db.tables[self._table] if id(row) not in target_ids
            ]
            return MockSupabaseResponse(copy.deepcopy(targets))

        raise NotImplementedError(self._op)


class FakeSupabaseClient:
    """
    In-memory PostgREST-like database.

    Rows are plain dicts keyed by table name. Foreign keys behave like
    constraints without ON DELETE CASCADE: inserting an orphan or deleting a
    referenced parent raises APIError with SQLSTATE 23503.
    """

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            "merchants": [],
            "invoices": [],
            "payments": [],
            "supported_payment_options": [],
        }
        self.executed: List[Tuple[str, str]] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def check_parent_exists(self, table: str, row: Dict[str, Any]) -> None:
        for child, column, parent in FOREIGN_KEYS:
            if child != table or row.get(column) is None:
                continue
            if not any(p["id"] == row[column] for p in self.tables[parent]):
                raise APIError({
                    "code": "23503",
                    "message": (
                        f'insert or update on table "{child}" violates '
                        f'foreign key constraint "{child}_{column}_fkey"'
                    ),
                    "details": f'Key ({column})=({row[column]}) is not present in table "{parent}".',
                    "hint": None,
                })

    def check_no_children(self, table: str, row: Dict[str, Any]) -> None:
        for child, column, parent in FOREIGN_KEYS:
            if parent != table:
                continue
            if any(c.get(column) == row["id"] for c in self.tables[child]):
                raise APIError({
                    "code": "23503",
                    "message": (
                        f'update or delete on table "{parent}" violates '
                        f'foreign key constraint "{child}_{column}_fkey" on table "{child}"'
                    ),
                    "details": f'Key (id)=({row["id"]}) is still referenced from table "{child}".',
                    "hint": None,
                })


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client for query-chain assertions.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    """Empty in-memory database."""
    return FakeSupabaseClient()


@pytest.fixture
def client(fake_client):
    """
    Create test client for the FastAPI app backed by the in-memory database.
    """
    from fastapi.testclient import TestClient

    from hotpay.db.client import get_supabase_client
    from hotpay.main import app

    app.dependency_overrides[get_supabase_client] = lambda: fake_client

    yield TestClient(app)

    # Clean up after test
    app.dependency_overrides.clear()
