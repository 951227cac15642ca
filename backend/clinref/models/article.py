from clinref.extensions import db
from .base import BaseModel, UpdatedAtMixin


class Article(BaseModel, UpdatedAtMixin):
    """Live, currently-published state of a clinical-reference article."""

    __tablename__ = "articles"

    # Versioned fields
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    content = db.Column(db.Text, nullable=False)
    summary = db.Column(db.String(500), nullable=True)
    category = db.Column(db.String(100), nullable=True, index=True)
    tags = db.Column(db.JSON, nullable=False, default=list)
    reference_ranges = db.Column(db.JSON, nullable=False, default=list)
    clinical_significance = db.Column(db.Text, nullable=True)
    interpretation = db.Column(db.Text, nullable=True)
    related_tests = db.Column(db.JSON, nullable=False, default=list)
    references = db.Column(db.JSON, nullable=False, default=list)
    images = db.Column(db.JSON, nullable=False, default=list)
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)

    # System fields, never touched by a restore
    author = db.Column(db.String(100), nullable=True)
    views = db.Column(db.Integer, nullable=False, default=0)
