from typing import Any, Dict, Optional, Tuple
from clinref.models.article_revision import ArticleRevision
from clinref.domain.exceptions import ValidationError
from clinref.domain.fields import VERSIONED_FIELDS
from clinref.domain.invariants.article import assert_article_fields
from clinref.stores.article_store import ArticleStore, DocumentStore
from clinref.application.revisions.create_revision import create_revision


def update_article(
    *,
    article_id: str,
    data: Dict[str, Any],
    edited_by: Optional[str] = None,
    change_description: Optional[str] = "",
    store: Optional[DocumentStore] = None,
) -> Tuple[Dict[str, Any], ArticleRevision]:
    """
    Apply an edit to the live article, then record it as a new revision.

    Design rules:
    - Only versioned fields are mutable here
    - No silent no-op updates
    - The article update is durable before the revision is written
    """
    store = store or ArticleStore()
    current = store.get_current(article_id)

    merged = dict(current)
    merged.update({name: data[name] for name in VERSIONED_FIELDS if name in data})

    # Compare after defaults are applied so null == [] does not count
    payload = assert_article_fields(merged)
    changed_fields = [name for name in VERSIONED_FIELDS if payload[name] != current[name]]

    if not changed_fields:
        # Explicitly fail instead of silently succeeding
        raise ValidationError("No changed article fields provided for update")

    fields = store.set_current(article_id, payload)

    revision = create_revision(
        article_id=article_id,
        fields=fields,
        edited_by=edited_by,
        change_description=change_description,
    )

    return fields, revision
