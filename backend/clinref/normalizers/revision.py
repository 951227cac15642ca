from __future__ import annotations

from typing import Any, Dict
from clinref.models.article_revision import ArticleRevision


def normalize_revision(revision: ArticleRevision) -> Dict[str, Any]:
    """
    Normalizes an ArticleRevision into API-safe JSON.

    fields is returned verbatim; snapshots are never reshaped.
    """

    if not revision:
        raise ValueError("ArticleRevision cannot be None")

    return {
        "id": revision.id,
        "article_id": revision.article_id,
        "version_number": revision.version_number,
        "fields": revision.fields,
        "edited_by": revision.edited_by,
        "change_description": revision.change_description or "",
        "created_at": revision.created_at.isoformat() if revision.created_at else None,
    }


def normalize_revision_diff(revision1, revision2, diff) -> Dict[str, Any]:
    return {
        "version1": normalize_revision(revision1),
        "version2": normalize_revision(revision2),
        "differences": diff.differences,
    }
