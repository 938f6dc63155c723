from __future__ import annotations

# Longest slice of a response body carried into the message.
BODY_PREVIEW_CHARS = 200


class PromptAuditError(Exception):
    """Base class for errors raised by the prompt audit package."""


class InvalidInputError(PromptAuditError):
    """The prompt is missing, not text, or blank."""


class ExternalCallError(PromptAuditError):
    """The generative model call failed or returned nothing usable."""

    def __init__(self, message: str, status: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body

    def __str__(self) -> str:
        message = super().__str__()
        if self.status is None:
            return message
        body = self.body or ""
        if len(body) > BODY_PREVIEW_CHARS:
            body = body[:BODY_PREVIEW_CHARS] + "..."
        return f"{message} (status {self.status}): {body}"
