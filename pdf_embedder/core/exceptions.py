"""
Exceptions raised while matching files and talking to the host application.
File: pdf_embedder/core/exceptions.py
"""


class EmbedError(Exception):
    """Base class for all embed-pdf-pages errors."""


class NoKeyMatch(EmbedError, ValueError):
    """
    Raised when a filename does not satisfy the active extraction rule.

    This is not fatal: the caller skips the key-gated file categories
    for that source document, logs a diagnostic and keeps going.
    """

    def __init__(self, filename, rule_name=None, message=None):
        """
        Initialize key match error.

        Args:
            filename: Source filename (extension stripped) that failed to match
            rule_name: Name of the extraction rule that was applied
            message: Custom error message
        """
        self.filename = filename
        self.rule_name = rule_name

        if message:
            super().__init__(message)
        else:
            base_msg = f"No document key in '{filename}'"
            if rule_name:
                base_msg += f" (pattern: {rule_name})"
            super().__init__(base_msg)


class HostError(EmbedError):
    """
    Raised by a host application adapter when an operation fails.

    The optional context names the file or operation involved and is
    written to the diagnostic log next to the error text.
    """

    def __init__(self, message, context=None):
        self.context = context
        super().__init__(message)


class PageOutOfRange(HostError):
    """Raised when a multi-page document is opened at a page it does not have."""

    def __init__(self, page, context=None, message=None):
        self.page = page
        super().__init__(message or f"Page {page} is out of range", context=context)


class UserCancelled(EmbedError):
    """Raised when the user cancels a prompt. Never reported as an error."""


# End of file #
