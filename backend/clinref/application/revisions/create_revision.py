from typing import Any, Mapping, Optional
from flask import current_app
from sqlalchemy.exc import IntegrityError
from clinref.extensions import db
from clinref.models.article_revision import ArticleRevision
from clinref.models.base import utcnow
from clinref.domain.exceptions import VersionConflict
from clinref.domain.invariants.article import assert_article_fields
from clinref.utils.transaction import transactional
from clinref.utils.versioning import is_version_collision, next_version


def create_revision(
    *,
    article_id: str,
    fields: Mapping[str, Any],
    edited_by: Optional[str] = None,
    change_description: Optional[str] = "",
) -> ArticleRevision:
    """
    Record the given field set as the article's next revision.

    Responsibilities:
    - Payload validation before any write
    - Version allocation with bounded retry on uniqueness violations
    - One committed, immutable ArticleRevision per call

    The caller's article edit is never rolled back here; commit it first.
    """

    payload = assert_article_fields(fields)
    editor = edited_by or current_app.config["DEFAULT_EDITOR"]
    max_attempts = current_app.config["REVISION_MAX_ATTEMPTS"]

    for attempt in range(1, max_attempts + 1):
        revision = ArticleRevision()
        revision.article_id = article_id
        revision.version_number = next_version(article_id)
        revision.fields = payload
        revision.edited_by = editor
        revision.change_description = change_description or ""
        revision.created_at = utcnow()

        try:
            with transactional():
                db.session.add(revision)
        except IntegrityError as exc:
            if not is_version_collision(exc):
                raise
            # Lost the race for this number; the rollback freed it
            current_app.logger.warning(
                f"Version {revision.version_number} of article {article_id} "
                f"already taken (attempt {attempt}/{max_attempts})"
            )
            continue

        return revision

    current_app.logger.error(f"Version allocation for article {article_id} exhausted retries")
    raise VersionConflict(article_id, max_attempts)
