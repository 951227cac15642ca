# clinref/api/v1/articles.py
from flask import request, jsonify
from clinref.application.articles.create_article import create_article as create_article_use_case
from clinref.application.articles.update_article import update_article as update_article_use_case
from clinref.normalizers.article import normalize_article
from clinref.normalizers.revision import normalize_revision
from clinref.stores.article_store import ArticleStore
from clinref.utils.editor import resolve_editor
from clinref.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp # import the versioned blueprint


# ------------------------
# Articles
# ------------------------

@v1_bp.route("/articles", methods=["POST"])
def create_article():
    data = request.get_json(silent=True) or {}

    article, revision = create_article_use_case(
        data=data,
        edited_by=resolve_editor(data),
        change_description=data.get("change_description", ""),
    )

    return jsonify({
        "data": normalize_article(article),
        "revision": normalize_revision(revision),
        "message": "Article created successfully"
    }), 201


@v1_bp.route("/articles/<article_ref>", methods=["GET"])
def get_article(article_ref):
    article = ArticleStore().load_ref(article_ref)
    return jsonify({"data": normalize_article(article)})


@v1_bp.route("/articles/<article_ref>", methods=["PUT"])
def update_article(article_ref):
    store = ArticleStore()
    article = store.load_ref(article_ref)
    article_id = article.id

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(article)

    data = request.get_json(silent=True) or {}

    _, revision = update_article_use_case(
        article_id=article_id,
        data=data,
        edited_by=resolve_editor(data),
        change_description=data.get("change_description", ""),
        store=store,
    )

    return jsonify({
        "data": normalize_article(store.load(article_id)),
        "revision": normalize_revision(revision),
        "message": "Article updated successfully"
    }), 200
