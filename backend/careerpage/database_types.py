"""
Custom SQLAlchemy column types shared by Postgres (production) and SQLite (tests).
"""
import json
import uuid

from pydantic import BaseModel
from sqlalchemy import CHAR, Text, TypeDecorator
from sqlalchemy.dialects.postgresql import JSONB, UUID


class GUID(TypeDecorator):
    """
    UUID primary/foreign key.

    Native UUID on PostgreSQL, CHAR(36) elsewhere. Values always come back
    as uuid.UUID so the gateway can compare them with parsed identifiers.
    """
    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(UUID(as_uuid=True))
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(str(value))
        if dialect.name == 'postgresql':
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


def _to_plain(value):
    """Turn pydantic models (and lists of them) into camelCase JSON data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    return value


class JSONDocument(TypeDecorator):
    """
    Embedded JSON document (brand_config, page_sections).

    JSONB on PostgreSQL, TEXT elsewhere. Accepts pydantic models directly and
    stores them by alias, which keeps the persisted shape camelCase.
    """
    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        value = _to_plain(value)
        if dialect.name == 'postgresql':
            return value
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        if isinstance(value, (dict, list)):
            return value
        return json.loads(value)
