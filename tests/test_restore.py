"""Tests for edits feeding the writer, comparison and restore."""

import importlib

import pytest
from sqlalchemy.exc import OperationalError

from clinref.extensions import db
from clinref.application.articles.update_article import update_article
from clinref.application.revisions.compare_revisions import compare_revisions
from clinref.application.revisions.list_revisions import get_revision, list_revisions
from clinref.application.revisions.restore_revision import record_restore, restore_revision
from clinref.domain.exceptions import (
    InconsistentRestoreState,
    NotFound,
    ValidationError,
    VersionConflict,
)
from clinref.models.article import Article
from clinref.stores.article_store import ArticleStore

restorer = importlib.import_module("clinref.application.revisions.restore_revision")
routes = importlib.import_module("clinref.api.v1.revisions")


@pytest.fixture
def d1(make_article):
    """Article with three revisions titled A, B and C."""
    article = make_article(title="A", slug="d1")
    update_article(article_id=article.id, data={"title": "B"})
    update_article(article_id=article.id, data={"title": "C"})
    return article


def version_numbers(article_id):
    revisions, _ = list_revisions(article_id=article_id, page=1, page_size=100)
    return [r.version_number for r in revisions]


class TestUpdateArticle:
    def test_each_edit_records_next_version(self, article):
        fields, revision = update_article(
            article_id=article.id,
            data={"summary": "Updated summary", "views": 999},
            edited_by="dr-jones",
            change_description="Tighten summary",
        )

        assert revision.version_number == 2
        assert revision.fields == fields
        assert fields["summary"] == "Updated summary"
        assert db.session.get(Article, article.id).views == 0

    def test_no_op_update_is_rejected(self, article, article_fields):
        with pytest.raises(ValidationError, match="No changed"):
            update_article(article_id=article.id, data={"title": article_fields["title"]})

        assert version_numbers(article.id) == [1]

    def test_null_list_matching_empty_default_is_a_no_op(self, make_article):
        article = make_article(related_tests=[])

        with pytest.raises(ValidationError, match="No changed"):
            update_article(article_id=article.id, data={"related_tests": None})

        assert version_numbers(article.id) == [1]

    def test_invalid_update_writes_nothing(self, article):
        with pytest.raises(ValidationError, match="status"):
            update_article(article_id=article.id, data={"status": "retired"})

        assert version_numbers(article.id) == [1]
        assert ArticleStore().get_current(article.id)["status"] == "published"

    def test_unknown_article(self, app):
        with pytest.raises(NotFound):
            update_article(article_id="missing", data={"title": "x"})


class TestCompareRevisions:
    def test_worked_example(self, d1):
        revision1, revision3, diff = compare_revisions(article_id=d1.id, v1=1, v2=3)

        assert (revision1.version_number, revision3.version_number) == (1, 3)
        assert diff["title"].changed is True
        assert (diff["title"].old, diff["title"].new) == ("A", "C")
        assert diff.changed_fields == ["title"]

    def test_same_version(self, d1):
        _, _, diff = compare_revisions(article_id=d1.id, v1=2, v2=2)

        assert not diff.has_changes

    def test_missing_side(self, d1):
        with pytest.raises(NotFound):
            compare_revisions(article_id=d1.id, v1=1, v2=9)


class TestRestoreRevision:
    def test_worked_example(self, d1):
        fields, revision = restore_revision(article_id=d1.id, version_number=1, edited_by="editor")

        assert revision.version_number == 4
        assert revision.fields["title"] == "A"
        assert revision.edited_by == "editor"
        assert revision.change_description == "Restored to version 1"
        assert fields["title"] == "A"
        assert version_numbers(d1.id) == [4, 3, 2, 1]

    def test_restored_fields_match_target(self, d1):
        target = get_revision(article_id=d1.id, version_number=2)
        before = {
            n: get_revision(article_id=d1.id, version_number=n).fields
            for n in (1, 2, 3)
        }

        _, revision = restore_revision(article_id=d1.id, version_number=2)

        assert revision.fields == target.fields
        assert ArticleStore().get_current(d1.id) == target.fields
        for n, fields in before.items():
            assert get_revision(article_id=d1.id, version_number=n).fields == fields

    def test_restoring_the_latest_version_still_appends(self, d1):
        _, revision = restore_revision(article_id=d1.id, version_number=3)

        assert revision.version_number == 4
        assert version_numbers(d1.id) == [4, 3, 2, 1]

    def test_restore_of_a_restore(self, d1):
        restore_revision(article_id=d1.id, version_number=1)
        _, revision = restore_revision(article_id=d1.id, version_number=4)

        assert revision.version_number == 5
        assert revision.fields["title"] == "A"

    def test_system_fields_are_untouched(self, d1):
        article = db.session.get(Article, d1.id)
        article.views = 12
        article.author = "original-author"
        db.session.commit()
        created_at = article.created_at

        restore_revision(article_id=d1.id, version_number=1)

        article = db.session.get(Article, d1.id)
        assert article.views == 12
        assert article.author == "original-author"
        assert article.created_at == created_at
        assert article.title == "A"

    def test_missing_target(self, d1):
        with pytest.raises(NotFound):
            restore_revision(article_id=d1.id, version_number=7)

        assert version_numbers(d1.id) == [3, 2, 1]
        assert ArticleStore().get_current(d1.id)["title"] == "C"

    def test_document_update_failure_writes_no_revision(self, d1, make_article):
        update_article(article_id=d1.id, data={"slug": "d1-renamed"})
        make_article(slug="d1")

        # Version 1 carries slug "d1", now owned by another article
        with pytest.raises(ValidationError, match="slug"):
            restore_revision(article_id=d1.id, version_number=1)

        assert version_numbers(d1.id) == [4, 3, 2, 1]
        assert ArticleStore().get_current(d1.id)["slug"] == "d1-renamed"

    def test_history_write_failure_is_reported_and_recoverable(self, d1, monkeypatch):
        def conflicting_writer(**kwargs):
            raise VersionConflict(kwargs["article_id"], 3)

        monkeypatch.setattr(restorer, "create_revision", conflicting_writer)

        with pytest.raises(InconsistentRestoreState) as excinfo:
            restore_revision(article_id=d1.id, version_number=1, edited_by="editor")

        error = excinfo.value
        assert (error.article_id, error.source_version, error.edited_by) == (d1.id, 1, "editor")
        assert isinstance(error.__cause__, VersionConflict)

        # Article moved, history did not
        assert ArticleStore().get_current(d1.id)["title"] == "A"
        assert version_numbers(d1.id) == [3, 2, 1]

        monkeypatch.undo()
        revision = record_restore(
            article_id=error.article_id,
            source_version=error.source_version,
            edited_by=error.edited_by,
        )

        assert revision.version_number == 4
        assert revision.fields["title"] == "A"
        assert revision.change_description == "Restored to version 1"

    def test_uses_the_given_document_store(self, d1):
        class RecordingStore(ArticleStore):
            def __init__(self):
                self.writes = []

            def set_current(self, article_id, fields):
                self.writes.append(article_id)
                return super().set_current(article_id, fields)

        store = RecordingStore()
        restore_revision(article_id=d1.id, version_number=2, store=store)

        assert store.writes == [d1.id]


class FailingReadStore(ArticleStore):
    """Store whose reads start failing once the restored fields are written."""

    def __init__(self, error):
        self.error = error
        self.written = False

    def set_current(self, article_id, fields):
        result = super().set_current(article_id, fields)
        self.written = True
        return result

    def get_current(self, article_id):
        if self.written:
            raise self.error
        return super().get_current(article_id)


class TestRestoreReadBackFailure:
    @pytest.mark.parametrize(
        "error",
        [
            OperationalError("SELECT articles", {}, Exception("connection reset")),
            NotFound("Article vanished"),
        ],
        ids=["database-error", "article-deleted"],
    )
    def test_reported_as_inconsistent_restore(self, d1, error):
        with pytest.raises(InconsistentRestoreState) as excinfo:
            restore_revision(
                article_id=d1.id,
                version_number=1,
                edited_by="editor",
                store=FailingReadStore(error),
            )

        assert excinfo.value.__cause__ is error
        assert (excinfo.value.article_id, excinfo.value.source_version) == (d1.id, 1)

        # Field copy happened, history write did not
        assert ArticleStore().get_current(d1.id)["title"] == "A"
        assert version_numbers(d1.id) == [3, 2, 1]

    def test_reported_over_http_with_recovery_details(self, client, d1, monkeypatch):
        failing = FailingReadStore(OperationalError("SELECT articles", {}, Exception("connection reset")))
        monkeypatch.setattr(routes, "ArticleStore", lambda: failing)

        response = client.post(f"/api/v1/articles/{d1.id}/restore/1")

        body = response.get_json()
        assert response.status_code == 500
        assert body["error"] == "InconsistentRestoreState"
        assert body["recoverable"] is True
        assert (body["article_id"], body["source_version"]) == (d1.id, 1)


class TestArticleStoreLookup:
    def test_resolves_id_and_current_slug(self, d1):
        store = ArticleStore()

        assert store.resolve_id(d1.id) == d1.id
        assert store.resolve_id("d1") == d1.id
        assert store.load_ref("d1").id == d1.id

    def test_unknown_ref_passes_through(self, app):
        store = ArticleStore()

        assert store.resolve_id("no-such-article") == "no-such-article"
        with pytest.raises(NotFound):
            store.load_ref("no-such-article")
