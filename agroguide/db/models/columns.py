"""Column helpers shared by the table models."""
import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import JSON, Text, Enum as SqlEnum
from sqlalchemy.dialects.postgresql import ARRAY

# text[] on the hosted Postgres, JSON elsewhere (local SQLite)
StringList = JSON().with_variant(ARRAY(Text), "postgresql")


def new_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def enum_type(enum_cls: type[Enum]) -> SqlEnum:
    """Store the enum's value (e.g. "in_review"), not its member name."""
    return SqlEnum(
        enum_cls,
        native_enum=False,
        length=20,
        values_callable=lambda members: [m.value for m in members],
    )
