from clinref.extensions import db
from .base import BaseModel
from sqlalchemy import event
from clinref.utils.versioning import VERSION_CONSTRAINT


class ArticleRevision(BaseModel):
    """
    Immutable snapshot of an article's versioned fields.

    article_id is a lookup reference, not a foreign key: history outlives
    the live row and the store accepts any document id.
    """

    __tablename__ = "article_revisions"

    article_id = db.Column(db.String(36), nullable=False)
    version_number = db.Column(db.Integer, nullable=False)

    fields = db.Column(db.JSON, nullable=False)

    edited_by = db.Column(db.String(100), nullable=False, default="admin")
    change_description = db.Column(db.Text, nullable=False, default="")

    __table_args__ = (
        db.UniqueConstraint("article_id", "version_number", name=VERSION_CONSTRAINT),
        db.CheckConstraint("version_number >= 1", name="ck_article_revision_version_positive"),
        db.Index("ix_article_revision_article", "article_id"),
    )


@event.listens_for(ArticleRevision, "before_update")
@event.listens_for(ArticleRevision, "before_delete")
def prevent_revision_mutation(mapper, connection, target):
    raise RuntimeError("Article revisions are immutable")
