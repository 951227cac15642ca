from typing import Any, Dict, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from clinref.extensions import db
from clinref.models.article import Article
from clinref.models.article_revision import ArticleRevision
from clinref.domain.exceptions import ValidationError
from clinref.domain.fields import VERSIONED_FIELDS
from clinref.domain.invariants.article import assert_article_fields
from clinref.utils.transaction import transactional
from clinref.application.revisions.create_revision import create_revision


def create_article(
    *,
    data: Dict[str, Any],
    edited_by: Optional[str] = None,
    change_description: Optional[str] = "",
) -> Tuple[Article, ArticleRevision]:
    """
    Create a live article and record it as version 1.

    Edge cases handled:
    - Missing required fields
    - Duplicate slug
    """

    payload = assert_article_fields(data)

    article = Article()
    for name in VERSIONED_FIELDS:
        setattr(article, name, payload[name])
    article.author = data.get("author") or edited_by

    try:
        with transactional():
            db.session.add(article)
    except IntegrityError as exc:
        # Unique constraint on slug
        raise ValidationError("An article with this slug already exists") from exc

    revision = create_revision(
        article_id=article.id,
        fields=payload,
        edited_by=edited_by,
        change_description=change_description,
    )

    return article, revision
