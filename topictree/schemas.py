"""
Topic and Content records and their stored wire shape.

Attributes are snake_case; the serialized form uses camelCase field names
(`parentId`, `topicId`, `createdAt`, ...). Decoding is strict: unknown
fields, missing fields and wrong types are rejected.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class Topic(_Record):
    id: str
    title: str
    slug: str
    parent_id: Optional[str]
    created_at: datetime
    updated_at: datetime
    created_by: str


class Content(_Record):
    id: str
    topic_id: str
    title: str
    body: str
    created_at: datetime
    updated_at: datetime
    created_by: str


TOPIC_LIST = TypeAdapter(list[Topic])
CONTENT_LIST = TypeAdapter(list[Content])


def dump_topics(topics: list[Topic]) -> str:
    return TOPIC_LIST.dump_json(topics, by_alias=True).decode()


def dump_contents(contents: list[Content]) -> str:
    return CONTENT_LIST.dump_json(contents, by_alias=True).decode()


# ---------------------------------------------------------------------------
# Seed data, installed when a collection has never been stored
# ---------------------------------------------------------------------------

SEED_ACTOR = "1"


def seed_topics() -> list[Topic]:
    now = utcnow()
    rows = [
        ("1", "Clients", "clients", None),
        ("2", "Projects", "projects", None),
        ("3", "Client A", "client-a", "1"),
    ]
    return [
        Topic(
            id=topic_id,
            title=title,
            slug=slug,
            parent_id=parent_id,
            created_at=now,
            updated_at=now,
            created_by=SEED_ACTOR,
        )
        for topic_id, title, slug, parent_id in rows
    ]


def seed_contents() -> list[Content]:
    now = utcnow()
    return [
        Content(
            id="1",
            topic_id="3",
            title="Client A Information",
            body="<p>This is information about Client A.</p><p>They are a great client!</p>",
            created_at=now,
            updated_at=now,
            created_by=SEED_ACTOR,
        )
    ]
