"""
Error kinds raised by the model layer.

HTTP-mapped errors subclass the matching werkzeug exception so Flask's
error handlers pick them up by status code.
"""

from __future__ import annotations

from dataclasses import dataclass

from werkzeug.exceptions import BadRequest, NotFound


class RecordNotFound(NotFound):
    """A lookup by id or search term matched zero rows."""


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class InvalidPayload(BadRequest):
    """Submitted form data could not be decoded into a model."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


class OperationalAlert(RuntimeError):
    """
    A query that should always return rows came back empty.
    Surfaces as a generic 500; the log line is what an operator acts on.
    """
