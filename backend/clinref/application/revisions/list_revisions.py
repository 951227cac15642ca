from typing import List, Tuple
from clinref.models.article_revision import ArticleRevision
from clinref.domain.exceptions import NotFound
from clinref.utils.pagination import paginate_offset


def list_revisions(
    *,
    article_id: str,
    page: int = 1,
    page_size: int = 20,
) -> Tuple[List[ArticleRevision], int]:
    """
    Newest-first page of an article's revisions plus the total count.

    An unknown article yields an empty page, not an error.
    """
    query = (
        ArticleRevision.query
        .filter_by(article_id=article_id)
        .order_by(ArticleRevision.version_number.desc())
    )
    return paginate_offset(query, page=page, limit=page_size)


def get_revision(*, article_id: str, version_number: int) -> ArticleRevision:
    revision = (
        ArticleRevision.query
        .filter_by(article_id=article_id, version_number=version_number)
        .first()
    )

    if not revision:
        raise NotFound(f"Revision {version_number} of article {article_id} not found")

    return revision
