from typing import Any, Dict, Optional, Tuple
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from clinref.models.article_revision import ArticleRevision
from clinref.domain.exceptions import (
    InconsistentRestoreState,
    NotFound,
    ValidationError,
    VersionConflict,
)
from clinref.stores.article_store import ArticleStore, DocumentStore
from clinref.utils.versioning import restore_description
from clinref.application.revisions.create_revision import create_revision
from clinref.application.revisions.list_revisions import get_revision


def restore_revision(
    *,
    article_id: str,
    version_number: int,
    edited_by: Optional[str] = None,
    store: Optional[DocumentStore] = None,
) -> Tuple[Dict[str, Any], ArticleRevision]:
    """
    Roll the live article back to an earlier revision.

    Steps:
    1. Fetch the target revision (NotFound if absent)
    2. Overwrite the article's versioned fields through the document store
    3. Record the restore as a brand-new revision (max + 1)

    Steps 2 and 3 are not atomic. A failure in step 3 raises
    InconsistentRestoreState; re-issue record_restore only.
    """
    store = store or ArticleStore()

    target = get_revision(article_id=article_id, version_number=version_number)

    # Failures here propagate untouched: nothing has been written yet
    store.set_current(article_id, target.fields)

    current_app.logger.info(f"Article {article_id} restored to version {version_number}")

    revision = record_restore(
        article_id=article_id,
        source_version=version_number,
        edited_by=edited_by,
        store=store,
    )

    return revision.fields, revision


def record_restore(
    *,
    article_id: str,
    source_version: int,
    edited_by: Optional[str] = None,
    store: Optional[DocumentStore] = None,
) -> ArticleRevision:
    """History-write half of a restore; safe to call again after InconsistentRestoreState."""
    store = store or ArticleStore()

    # The article has already moved; any failure from here on leaves history behind
    try:
        fields = store.get_current(article_id)
        return create_revision(
            article_id=article_id,
            fields=fields,
            edited_by=edited_by,
            change_description=restore_description(source_version),
        )
    except (NotFound, VersionConflict, ValidationError, SQLAlchemyError) as exc:
        current_app.logger.error(
            f"Article {article_id} moved to version {source_version} "
            f"but its revision was not recorded: {exc}"
        )
        raise InconsistentRestoreState(article_id, source_version, edited_by) from exc
