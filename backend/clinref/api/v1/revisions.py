# clinref/api/v1/revisions.py
from flask import current_app, request, jsonify
from clinref.application.revisions.create_revision import create_revision as create_revision_use_case
from clinref.application.revisions.list_revisions import (
    get_revision as get_revision_use_case,
    list_revisions as list_revisions_use_case,
)
from clinref.application.revisions.compare_revisions import compare_revisions as compare_revisions_use_case
from clinref.application.revisions.restore_revision import restore_revision as restore_revision_use_case
from clinref.domain.exceptions import ValidationError
from clinref.normalizers.article import normalize_article
from clinref.normalizers.pagination import normalize_pagination
from clinref.normalizers.revision import normalize_revision, normalize_revision_diff
from clinref.stores.article_store import ArticleStore
from clinref.utils.editor import resolve_editor
from . import v1_bp


# ------------------------
# Revisions
# ------------------------

@v1_bp.route("/articles/<article_ref>/revisions", methods=["POST"])
def create_revision(article_ref):
    """Checkpoint the live article's current state as a new revision."""
    store = ArticleStore()
    article_id = store.resolve_id(article_ref)
    data = request.get_json(silent=True) or {}
    fields = store.get_current(article_id)

    revision = create_revision_use_case(
        article_id=article_id,
        fields=fields,
        edited_by=resolve_editor(data),
        change_description=data.get("change_description", ""),
    )

    return jsonify({"data": normalize_revision(revision)}), 201


@v1_bp.route("/articles/<article_ref>/revisions", methods=["GET"])
def list_revisions(article_ref):
    article_id = ArticleStore().resolve_id(article_ref)
    page = request.args.get("page", 1, type=int)
    limit = request.args.get("limit", current_app.config["REVISIONS_PAGE_SIZE"], type=int)
    limit = min(limit, current_app.config["REVISIONS_MAX_PAGE_SIZE"])

    revisions, total = list_revisions_use_case(
        article_id=article_id,
        page=page,
        page_size=limit,
    )

    return jsonify(normalize_pagination(
        revisions,
        normalize_revision,
        page=page,
        limit=limit,
        total=total,
    )), 200


@v1_bp.route("/articles/<article_ref>/revisions/<int:version_number>", methods=["GET"])
def get_revision(article_ref, version_number):
    article_id = ArticleStore().resolve_id(article_ref)
    revision = get_revision_use_case(article_id=article_id, version_number=version_number)
    return jsonify({"data": normalize_revision(revision)}), 200


@v1_bp.route("/articles/<article_ref>/compare", methods=["GET"])
def compare_revisions(article_ref):
    article_id = ArticleStore().resolve_id(article_ref)
    v1 = request.args.get("v1", type=int)
    v2 = request.args.get("v2", type=int)

    if not v1 or not v2:
        raise ValidationError("Both v1 and v2 version numbers are required")

    revision1, revision2, diff = compare_revisions_use_case(
        article_id=article_id,
        v1=v1,
        v2=v2,
    )

    return jsonify({"data": normalize_revision_diff(revision1, revision2, diff)}), 200


@v1_bp.route("/articles/<article_ref>/restore/<int:version_number>", methods=["POST"])
def restore_revision(article_ref, version_number):
    store = ArticleStore()
    article_id = store.resolve_id(article_ref)
    data = request.get_json(silent=True) or {}

    _, revision = restore_revision_use_case(
        article_id=article_id,
        version_number=version_number,
        edited_by=resolve_editor(data),
        store=store,
    )

    return jsonify({
        "data": normalize_article(store.load(article_id)),
        "revision": normalize_revision(revision),
        "message": f"Article restored to version {version_number}"
    }), 200
