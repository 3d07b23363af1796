"""Tag normalization, usage counters and listings."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from sqlalchemy import case, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from stackit.core.errors import ValidationError
from stackit.models import Tag

logger = logging.getLogger(__name__)

TAG_NAME_PATTERN = re.compile(r"^[a-z0-9-]{2,30}$")
MAX_TAGS = 5

_UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}

_TAG_ORDERING = {
    "popular": (Tag.question_count.desc(), Tag.name.asc()),
    "alphabetical": (Tag.name.asc(),),
    "newest": (Tag.created_at.desc(), Tag.id.desc()),
}


def normalize_tags(raw_tags: Iterable[str]) -> list[str]:
    """Lowercase, trim, drop empties and duplicates while keeping the given order.

    Raises:
        ValidationError: No usable tag is left, there are more than five,
            or a tag has an invalid name.
    """
    normalized: list[str] = []
    for raw in raw_tags:
        name = raw.strip().lower()
        if name and name not in normalized:
            normalized.append(name)

    if not normalized:
        raise ValidationError("At least one valid tag is required", code="invalid_tags")
    if len(normalized) > MAX_TAGS:
        raise ValidationError(f"At most {MAX_TAGS} tags are allowed", code="too_many_tags")

    invalid = [name for name in normalized if not TAG_NAME_PATTERN.match(name)]
    if invalid:
        raise ValidationError(
            "Tags must be 2-30 characters of lowercase letters, numbers, and hyphens",
            code="invalid_tags",
            errors=[{"field": "tags", "message": f"Invalid tag: {name}"} for name in invalid],
        )
    return normalized


def record_usage(db: Session, names: Iterable[str]) -> None:
    """Increment ``question_count`` for each tag, creating unknown tags on first use.

    Runs as one upsert keyed on the tag name, so two questions introducing the
    same new tag at once both count instead of colliding on the unique name.
    """
    names = list(names)
    if not names:
        return
    dialect = db.get_bind().dialect.name
    stmt = _UPSERT_INSERTS[dialect](Tag).values(
        [{"name": name, "question_count": 1} for name in names]
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[Tag.name],
        set_={"question_count": Tag.question_count + 1},
    )
    db.execute(stmt)
    logger.debug("Recorded usage of tags %s", names)


def release_usage(db: Session, names: Iterable[str]) -> None:
    """Decrement ``question_count`` for each tag, never going below zero."""
    names = list(names)
    if not names:
        return
    db.execute(
        update(Tag)
        .where(Tag.name.in_(names))
        .values(
            question_count=case(
                (Tag.question_count > 0, Tag.question_count - 1),
                else_=0,
            )
        )
    )


def list_tags(db: Session, *, sort: str = "popular", limit: int = 50) -> list[Tag]:
    """Return active tags in the requested order."""
    ordering = _TAG_ORDERING.get(sort, _TAG_ORDERING["popular"])
    return list(
        db.scalars(select(Tag).where(Tag.is_active.is_(True)).order_by(*ordering).limit(limit))
    )


def popular_tags(db: Session, *, limit: int = 20) -> list[Tag]:
    """Return active tags that are attached to at least one live question."""
    return list(
        db.scalars(
            select(Tag)
            .where(Tag.is_active.is_(True), Tag.question_count > 0)
            .order_by(Tag.question_count.desc(), Tag.name.asc())
            .limit(limit)
        )
    )
