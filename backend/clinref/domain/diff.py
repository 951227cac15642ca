"""
Field-level comparison between two revisions of the same article.

Pure functions only: no database access, no Flask context. The per-field
changed/unchanged partition does not depend on argument order; only which
side holds which raw value does.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from clinref.domain.exceptions import ValidationError
from clinref.domain.fields import (
    RECORD_SEQUENCE_FIELDS,
    SEQUENCE_FIELDS,
    VERSIONED_FIELDS,
)


@dataclass(frozen=True)
class FieldDiff:
    """Raw values of one field on both sides, plus whether they differ."""

    field: str
    old: Any
    new: Any
    changed: bool


@dataclass(frozen=True)
class RevisionDiff:
    """Comparison of every versioned field between two revisions."""

    article_id: str
    version1: int
    version2: int
    fields: Tuple[FieldDiff, ...]

    @property
    def differences(self) -> Dict[str, bool]:
        return {item.field: item.changed for item in self.fields}

    @property
    def changed_fields(self) -> List[str]:
        return [item.field for item in self.fields if item.changed]

    @property
    def has_changes(self) -> bool:
        return any(item.changed for item in self.fields)

    def __getitem__(self, field: str) -> FieldDiff:
        for item in self.fields:
            if item.field == field:
                return item
        raise KeyError(field)


def serialize_record(record: Any) -> str:
    """Canonical structural form of a nested record (key order ignored)."""
    return json.dumps(record, sort_keys=True, separators=(",", ":"), default=str)


def scalar_changed(old: Any, new: Any) -> bool:
    return old != new


def sequence_changed(old: Sequence[Any] | None, new: Sequence[Any] | None) -> bool:
    old = list(old or [])
    new = list(new or [])

    if len(old) != len(new):
        return True

    return any(a != b for a, b in zip(old, new))


def record_sequence_changed(old: Sequence[Any] | None, new: Sequence[Any] | None) -> bool:
    old = list(old or [])
    new = list(new or [])

    if len(old) != len(new):
        return True

    return any(
        serialize_record(a) != serialize_record(b)
        for a, b in zip(old, new)
    )


def field_changed(field: str, old: Any, new: Any) -> bool:
    if field in RECORD_SEQUENCE_FIELDS:
        return record_sequence_changed(old, new)
    if field in SEQUENCE_FIELDS:
        return sequence_changed(old, new)
    return scalar_changed(old, new)


def diff_fields(old: Mapping[str, Any], new: Mapping[str, Any]) -> Tuple[FieldDiff, ...]:
    return tuple(
        FieldDiff(
            field=name,
            old=old.get(name),
            new=new.get(name),
            changed=field_changed(name, old.get(name), new.get(name)),
        )
        for name in VERSIONED_FIELDS
    )


def diff_revisions(a: Any, b: Any) -> RevisionDiff:
    """
    Compare two revisions of the same article.

    Accepts anything exposing ``article_id``, ``version_number`` and
    ``fields`` (ArticleRevision rows in practice).

    Raises:
    - ValidationError if the revisions belong to different articles
    """
    if a.article_id != b.article_id:
        raise ValidationError("Cannot compare revisions of different articles")

    return RevisionDiff(
        article_id=a.article_id,
        version1=a.version_number,
        version2=b.version_number,
        fields=diff_fields(a.fields or {}, b.fields or {}),
    )
