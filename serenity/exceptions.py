"""Errors raised while ingesting a corpus."""


class CorpusLoadError(ValueError):
    """Raised when a corpus source cannot be read or lacks required columns.

    A failed load never replaces the corpus that was active before the call.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human readable description of the failure.
            source: Description of the offending source (path or "<csv text>").
        """
        super().__init__(message)
        self.source = source
