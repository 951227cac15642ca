import copy
from typing import Any, Dict

from clinref.domain.fields import VERSIONED_FIELDS


def snapshot_article(article) -> Dict[str, Any]:
    """Copy of the versioned fields of a live Article row."""
    return {
        name: copy.deepcopy(getattr(article, name))
        for name in VERSIONED_FIELDS
    }


def restore_description(version_number: int) -> str:
    return f"Restored to version {version_number}"


def next_version(article_id: str) -> int:
    """
    Next version number for an article: 1 for a fresh article, max + 1 otherwise.

    Not race-free on its own; the unique (article_id, version_number)
    constraint and the writer's retry loop settle concurrent callers.
    """
    from clinref.models.article_revision import ArticleRevision

    last = (
        ArticleRevision.query
        .filter_by(article_id=article_id)
        .order_by(ArticleRevision.version_number.desc())
        .first()
    )
    return (last.version_number + 1) if last else 1


VERSION_CONSTRAINT = "uq_article_revision_version"


def is_version_collision(exc) -> bool:
    """
    True when an IntegrityError comes from the (article_id, version_number)
    unique constraint, i.e. a concurrent writer took the number first.
    """
    orig = getattr(exc, "orig", None)

    # PostgreSQL drivers expose the violated constraint by name
    diag = getattr(orig, "diag", None)
    if diag is not None and getattr(diag, "constraint_name", None):
        return diag.constraint_name == VERSION_CONSTRAINT

    message = str(orig if orig is not None else exc)
    if VERSION_CONSTRAINT in message:
        return True

    # SQLite names the columns instead of the constraint
    return (
        "UNIQUE constraint failed" in message
        and "article_revisions.article_id" in message
        and "article_revisions.version_number" in message
    )
