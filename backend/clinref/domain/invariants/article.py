import copy
from typing import Any, Dict, Mapping

from clinref.domain.exceptions import ValidationError
from clinref.domain.fields import (
    AGE_GROUPS,
    ARTICLE_STATUSES,
    RECORD_SEQUENCE_FIELDS,
    SEQUENCE_FIELDS,
    VERSIONED_FIELDS,
    field_default,
)

REQUIRED_TEXT_FIELDS = ("title", "slug", "content")
OPTIONAL_TEXT_FIELDS = ("summary", "category", "clinical_significance", "interpretation")
MAX_LENGTHS = {"title": 200, "summary": 500}


def _require_text(value: Any, label: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required")


def _optional_text(value: Any, label: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")


def assert_reference_range(entry: Any, index: int) -> None:
    if not isinstance(entry, Mapping):
        raise ValidationError(f"reference_ranges[{index}] must be an object")

    for key in ("parameter", "range", "unit"):
        _require_text(entry.get(key), f"reference_ranges[{index}].{key}")

    if "age_group" in entry and entry["age_group"] not in AGE_GROUPS:
        raise ValidationError(
            f"reference_ranges[{index}].age_group must be one of {', '.join(AGE_GROUPS)}"
        )

    _optional_text(entry.get("notes"), f"reference_ranges[{index}].notes")


def assert_image(entry: Any, index: int) -> None:
    if not isinstance(entry, Mapping):
        raise ValidationError(f"images[{index}] must be an object")

    _require_text(entry.get("url"), f"images[{index}].url")
    _require_text(entry.get("alt"), f"images[{index}].alt")
    _optional_text(entry.get("caption"), f"images[{index}].caption")


def assert_article_fields(fields: Any) -> Dict[str, Any]:
    """
    Validate a versioned field set and return the copy that gets stored.

    - Keys outside the versioned set are dropped
    - Missing (or null) optional keys take their defaults
    - Nested records are kept exactly as given
    """
    if not isinstance(fields, Mapping):
        raise ValidationError("Article fields must be an object")

    payload: Dict[str, Any] = {}
    for name in VERSIONED_FIELDS:
        value = fields.get(name)
        payload[name] = copy.deepcopy(value) if value is not None else field_default(name)

    for name in REQUIRED_TEXT_FIELDS:
        _require_text(payload[name], name)

    for name in OPTIONAL_TEXT_FIELDS:
        _optional_text(payload[name], name)

    for name, limit in MAX_LENGTHS.items():
        if payload[name] is not None and len(payload[name]) > limit:
            raise ValidationError(f"{name} cannot be more than {limit} characters")

    if payload["status"] not in ARTICLE_STATUSES:
        raise ValidationError(f"status must be one of {', '.join(ARTICLE_STATUSES)}")

    for name in SEQUENCE_FIELDS + RECORD_SEQUENCE_FIELDS:
        if not isinstance(payload[name], list):
            raise ValidationError(f"{name} must be a list")

    for name in SEQUENCE_FIELDS:
        if not all(isinstance(item, str) for item in payload[name]):
            raise ValidationError(f"{name} must contain only strings")

    for index, entry in enumerate(payload["reference_ranges"]):
        assert_reference_range(entry, index)

    for index, entry in enumerate(payload["images"]):
        assert_image(entry, index)

    return payload
