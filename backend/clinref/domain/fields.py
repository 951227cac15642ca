from typing import Any, Tuple

# Exact comparison, no normalization
SCALAR_FIELDS: Tuple[str, ...] = (
    "title",
    "slug",
    "content",
    "summary",
    "category",
    "clinical_significance",
    "interpretation",
    "status",
)

# Ordered lists of strings
SEQUENCE_FIELDS: Tuple[str, ...] = ("tags", "related_tests", "references")

# Ordered lists of records; position is presentation order
RECORD_SEQUENCE_FIELDS: Tuple[str, ...] = ("reference_ranges", "images")

# Canonical order used for snapshots and diffs
VERSIONED_FIELDS: Tuple[str, ...] = (
    "title",
    "slug",
    "content",
    "summary",
    "category",
    "tags",
    "reference_ranges",
    "clinical_significance",
    "interpretation",
    "related_tests",
    "references",
    "images",
    "status",
)

ARTICLE_STATUSES: Tuple[str, ...] = ("draft", "published", "archived")
AGE_GROUPS: Tuple[str, ...] = ("Adult", "Pediatric", "Neonatal", "Geriatric", "All")


def field_default(name: str) -> Any:
    if name in SEQUENCE_FIELDS or name in RECORD_SEQUENCE_FIELDS:
        return []
    if name == "status":
        return "draft"
    return None
