"""Exception types raised across the maildedup pipeline."""

__all__ = [
    "MailDedupError",
    "FieldExtractionError",
    "FileParseFailure",
    "DeleteFailure",
]


class MailDedupError(Exception):
    """Base class for maildedup errors."""


class FieldExtractionError(MailDedupError):
    """Raised when a required message field is missing or unreadable.

    Only the identity deriver catches this; it switches to the dirty key.
    """


class FileParseFailure(MailDedupError):
    """Raised when a source file cannot be read or is not a message."""

    def __init__(self, path: str, message: str) -> None:
        """Initialize parse failure.

        Parameters
        ----------
        path : str
            File that failed.
        message : str
            Reason for the failure.
        """
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class DeleteFailure(MailDedupError):
    """Raised when a file marked as duplicate could not be removed."""

    def __init__(self, path: str, message: str) -> None:
        """Initialize delete failure.

        Parameters
        ----------
        path : str
            File that could not be removed.
        message : str
            Reason for the failure.
        """
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
