# garage/models/types.py
"""Column types shared across models."""

from sqlalchemy import JSON, String
from sqlalchemy.dialects.postgresql import ARRAY, JSONB

# text[] on Postgres, JSON elsewhere (SQLite in tests)
StringList = JSON().with_variant(ARRAY(String), "postgresql")

# jsonb on Postgres
JSONDocument = JSON().with_variant(JSONB(), "postgresql")
