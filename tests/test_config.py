"""
Tests for settings validation and the Supabase client factory.
"""

from unittest.mock import patch

import pytest

from hotpay.config import Settings, _as_bool
from hotpay.db import client as db_client


class TestSettings:

    def test_validate_lists_missing_variables(self):
        with patch.object(Settings, "SUPABASE_URL", ""), \
                patch.object(Settings, "SUPABASE_KEY", ""):
            with pytest.raises(ValueError) as exc_info:
                Settings.validate()

        assert "SUPABASE_URL" in str(exc_info.value)
        assert "SUPABASE_KEY" in str(exc_info.value)

    def test_validate_passes_when_configured(self):
        with patch.object(Settings, "SUPABASE_URL", "http://localhost:54321"), \
                patch.object(Settings, "SUPABASE_KEY", "key"):
            Settings.validate()

    @pytest.mark.parametrize("value,expected", [
        ("true", True),
        ("1", True),
        (" Yes ", True),
        ("false", False),
        ("", False),
    ])
    def test_bool_parsing(self, value, expected):
        assert _as_bool(value) is expected


class TestSupabaseClientFactory:

    def test_unconfigured_client_raises(self):
        with patch.object(db_client, "_supabase_client", None), \
                patch.object(Settings, "SUPABASE_URL", ""):
            with pytest.raises(ValueError):
                db_client.get_supabase_client()

    def test_client_created_once(self):
        with patch.object(db_client, "_supabase_client", None), \
                patch.object(Settings, "SUPABASE_URL", "http://localhost:54321"), \
                patch.object(Settings, "SUPABASE_KEY", "key"), \
                patch.object(db_client, "create_client") as mock_create:
            first = db_client.get_supabase_client()
            second = db_client.get_supabase_client()

        assert first is second
        mock_create.assert_called_once_with(
            supabase_url="http://localhost:54321",
            supabase_key="key",
        )
