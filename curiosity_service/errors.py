# curiosity_service/errors.py
from __future__ import annotations

from typing import Optional


class CuriosityError(Exception):
    """Base for errors that end one generate invocation.

    ``message`` is shown to the user verbatim; ``status_code`` is what the
    HTTP shell answers with.
    """

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CuriosityError):
    """Empty input or missing credential, raised before the core runs."""

    status_code = 400


class TransportError(CuriosityError):
    status_code = 502

    def __init__(self, message: str, *, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class ParseError(CuriosityError):
    status_code = 422
