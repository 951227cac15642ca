"""
Document store for live articles.

The revision engine reads and overwrites the live article only through
the DocumentStore protocol, so any backend exposing these two calls can
sit behind restore.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol

from flask import current_app
from sqlalchemy.exc import IntegrityError

from clinref.domain.exceptions import NotFound, ValidationError
from clinref.domain.fields import VERSIONED_FIELDS
from clinref.domain.invariants.article import assert_article_fields
from clinref.models.article import Article
from clinref.utils.transaction import transactional
from clinref.utils.versioning import snapshot_article


class DocumentStore(Protocol):
    def get_current(self, article_id: str) -> Dict[str, Any]: ...

    def set_current(self, article_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]: ...


class ArticleStore:
    """SQLAlchemy-backed DocumentStore over the articles table."""

    def load(self, article_id: str) -> Article:
        article = Article.query.filter_by(id=article_id).first()
        if not article:
            raise NotFound(f"Article {article_id} not found")
        return article

    def find(self, article_ref: str) -> Optional[Article]:
        """Live article by id, falling back to its current slug."""
        return (
            Article.query.filter_by(id=article_ref).first()
            or Article.query.filter_by(slug=article_ref).first()
        )

    def load_ref(self, article_ref: str) -> Article:
        article = self.find(article_ref)
        if not article:
            raise NotFound(f"Article {article_ref} not found")
        return article

    def resolve_id(self, article_ref: str) -> str:
        """
        Document id for an id or slug.

        Unknown refs pass through unchanged so history stays reachable by id
        after the live row is gone.
        """
        article = self.find(article_ref)
        return article.id if article else article_ref

    def get_current(self, article_id: str) -> Dict[str, Any]:
        return snapshot_article(self.load(article_id))

    def set_current(self, article_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Overwrite every versioned field of the live article and commit.

        System fields (id, created_at, author, views) are left untouched.
        """
        payload = assert_article_fields(fields)
        article = self.load(article_id)

        try:
            with transactional():
                for name in VERSIONED_FIELDS:
                    setattr(article, name, payload[name])
        except IntegrityError as exc:
            # Unique slug across live articles
            current_app.logger.info(f"Rejected update of article {article_id}: slug in use")
            raise ValidationError("An article with this slug already exists") from exc

        return payload
