from typing import Optional


class RevisionError(Exception):
    """Base class for every error raised by the revision engine."""


class NotFound(RevisionError):
    """Requested article or revision does not exist."""


class ValidationError(RevisionError):
    """Malformed article field set or request arguments."""


class VersionConflict(RevisionError):
    """Concurrent writers kept taking the allocated version number."""

    def __init__(self, article_id: str, attempts: int):
        self.article_id = article_id
        self.attempts = attempts
        super().__init__(
            f"Could not allocate a version for article {article_id} "
            f"after {attempts} attempts"
        )


class InconsistentRestoreState(RevisionError):
    """
    The live article was restored but the history entry was not written.

    Only the history write needs to be re-issued (see record_restore);
    the field copy has already happened.
    """

    def __init__(self, article_id: str, source_version: int, edited_by: Optional[str] = None):
        self.article_id = article_id
        self.source_version = source_version
        self.edited_by = edited_by
        super().__init__(
            f"Article {article_id} was restored to version {source_version} "
            "but the revision could not be recorded"
        )
