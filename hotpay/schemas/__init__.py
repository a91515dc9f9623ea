"""
Pydantic schemas for API request and response validation.

Models use snake_case attributes with camelCase aliases (see common.CamelModel).
Amounts are never floats: requests parse them to Decimal, responses carry strings.
"""
