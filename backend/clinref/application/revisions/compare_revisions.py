from typing import Tuple
from clinref.models.article_revision import ArticleRevision
from clinref.domain.diff import RevisionDiff, diff_revisions
from clinref.application.revisions.list_revisions import get_revision


def compare_revisions(
    *,
    article_id: str,
    v1: int,
    v2: int,
) -> Tuple[ArticleRevision, ArticleRevision, RevisionDiff]:
    """Fetch two revisions of one article and diff them field by field."""

    revision1 = get_revision(article_id=article_id, version_number=v1)
    revision2 = get_revision(article_id=article_id, version_number=v2)

    return revision1, revision2, diff_revisions(revision1, revision2)
