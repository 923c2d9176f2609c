"""Exceptions raised by the Coder Runner client core."""

import json


class CoderRunnerError(Exception):
    """Base exception for client-side failures."""


class MalformedResponseError(CoderRunnerError, ValueError):
    """Raised when a server payload cannot be decoded into a data contract."""


class UnknownLanguageError(CoderRunnerError, ValueError):
    """Raised when a language id is not present in the loaded catalog."""

    def __init__(self, language_id):
        super().__init__(f"Unknown language: {language_id!r}")
        self.language_id = language_id


class ApiError(CoderRunnerError):
    """
    A failed exchange with the execution service: network error, non-2xx
    status or an undecodable body.

    Attributes:
        status_code (int | None): HTTP status, when a response was received.
        body (bytes | None): Raw response body, when one was received.
    """

    def __init__(self, message, status_code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def server_message(self):
        """The server's own error text (``error`` or ``message`` field of a JSON body), if any."""
        if not self.body:
            return None
        try:
            payload = json.loads(self.body)
        except (ValueError, UnicodeDecodeError):
            return None
        if not isinstance(payload, dict):
            return None
        for key in ("error", "message"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value
        return None
