from typing import Any, Mapping, Optional

from flask import current_app, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request


def resolve_editor(data: Optional[Mapping[str, Any]] = None) -> str:
    """
    Identity recorded as a revision's author.

    Lookup order: body ``edited_by``, ``X-Edited-By`` header, JWT identity
    (only when a bearer token is sent), then DEFAULT_EDITOR.
    """
    if data and data.get("edited_by"):
        return str(data["edited_by"])

    header = request.headers.get("X-Edited-By")
    if header:
        return header

    # Invalid tokens are rejected by the JWT error handlers
    if verify_jwt_in_request(optional=True):
        identity = get_jwt_identity()
        if identity:
            return str(identity)

    return current_app.config["DEFAULT_EDITOR"]
