from flask import current_app, jsonify
from clinref.domain.exceptions import (
    InconsistentRestoreState,
    NotFound,
    RevisionError,
    ValidationError,
    VersionConflict,
)

ERROR_STATUS = (
    (NotFound, 404),
    (ValidationError, 400),
    (VersionConflict, 409),
    (InconsistentRestoreState, 500),
)


def status_for(error: RevisionError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 500


def register_error_handlers(app):
    @app.errorhandler(RevisionError)
    def handle_revision_error(error):
        body = {
            "error": type(error).__name__,
            "message": str(error)
        }

        if isinstance(error, InconsistentRestoreState):
            # Only the history write needs re-issuing
            body.update({
                "article_id": error.article_id,
                "source_version": error.source_version,
                "recoverable": True,
            })

        status = status_for(error)
        if status >= 500:
            current_app.logger.error(f"{body['error']}: {body['message']}")

        response = jsonify(body)
        response.status_code = status
        return response
