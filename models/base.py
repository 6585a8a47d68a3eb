from sqlalchemy import JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.dialects.postgresql import JSONB

Base = declarative_base()


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite for local runs and tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")
