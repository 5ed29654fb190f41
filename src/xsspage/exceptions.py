"""Errors raised at the edges of xsspage.

Everything here derives from XssPageError. The CLI turns any of them into a
click error message, and the HTTP adapter maps PayloadValidationError to a
400 response.

The analysis engines themselves never raise on bad input: they return a
structurally normal result instead. These exceptions belong to the
boundary layers (configuration, HTTP adapter, progress storage, CLI).
"""


class XssPageError(Exception):
    """Base exception for all xsspage errors."""


class ConfigError(XssPageError):
    """Raised when a configuration file cannot be read or is malformed."""


class PayloadValidationError(XssPageError):
    """Raised when a request payload fails boundary validation.

    Covers missing or non-string payloads, payloads over the size cap,
    and request bodies that are not valid JSON.
    """

    status = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProgressError(XssPageError):
    """Raised when a learning-progress document is invalid.

    Covers imports missing the ``version`` or ``stats`` fields and
    documents that are not JSON objects.
    """
