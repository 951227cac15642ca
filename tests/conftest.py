"""
Common pytest fixtures for the clinref test suite.

Provides shared fixtures for:
- Flask application with an in-memory SQLite database
- Test client
- Sample article payloads
- Article factory (creates the live article and its version 1)
"""

import copy
from typing import Any, Dict

import pytest

from clinref import create_app
from clinref.extensions import db
from clinref.application.articles.create_article import create_article


# ============================================
# Application
# ============================================

@pytest.fixture
def app():
    """Application bound to a fresh in-memory database."""
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


# ============================================
# Sample Data
# ============================================

SAMPLE_ARTICLE: Dict[str, Any] = {
    "title": "Serum Potassium",
    "slug": "serum-potassium",
    "content": "<p>Potassium is the main intracellular cation.</p>",
    "summary": "Reference ranges and interpretation of serum potassium.",
    "category": "Electrolytes",
    "tags": ["electrolytes", "potassium"],
    "reference_ranges": [
        {
            "parameter": "Potassium",
            "range": "3.5-5.0",
            "unit": "mmol/L",
            "age_group": "Adult",
            "notes": "Serum, non-hemolysed",
        },
        {
            "parameter": "Potassium",
            "range": "3.4-4.7",
            "unit": "mmol/L",
            "age_group": "Pediatric",
        },
    ],
    "clinical_significance": "Both hypo- and hyperkalemia can cause arrhythmias.",
    "interpretation": "Exclude hemolysis before acting on a high result.",
    "related_tests": ["Sodium", "Creatinine"],
    "references": ["Tietz Textbook of Laboratory Medicine, 7th ed."],
    "images": [
        {
            "url": "/media/ecg-hyperkalemia.png",
            "caption": "Peaked T waves",
            "alt": "ECG showing hyperkalemia",
        }
    ],
    "status": "published",
}


@pytest.fixture
def article_fields():
    """A complete, valid versioned field set."""
    return copy.deepcopy(SAMPLE_ARTICLE)


@pytest.fixture
def make_article(app):
    """Create a live article (and its version 1) from SAMPLE_ARTICLE plus overrides."""

    def _make(edited_by: str = "seed", **overrides):
        data = copy.deepcopy(SAMPLE_ARTICLE)
        data.update(overrides)
        article, _ = create_article(data=data, edited_by=edited_by)
        return article

    return _make


@pytest.fixture
def article(make_article):
    return make_article()
