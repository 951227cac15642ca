from datetime import datetime, timezone
import uuid
from clinref.extensions import db


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UpdatedAtMixin:
    """Last-modified stamp for mutable rows; write-once rows leave it out."""

    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, index=True)


class BaseModel(db.Model):
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, index=True)

    def __init__(self, **kwargs):
        """
        Dummy __init__ to satisfy static type checkers (Pylance, MyPy).
        SQLAlchemy ORM will populate fields dynamically.
        """
        super().__init__(**kwargs)
