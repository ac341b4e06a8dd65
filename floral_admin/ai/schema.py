"""Pydantic data contracts for AI client results."""

from enum import Enum

from pydantic import BaseModel


class ModelCard(BaseModel):
    """Metadata identifying the remote model a client talks to."""

    name: str
    version: str


class AIOutcome(str, Enum):
    ok = "ok"
    empty = "empty"  # request handled, but no text to show (stub or missing response path)
    failed = "failed"


class AIErrorKind(str, Enum):
    credential_missing = "credential_missing"
    transport = "transport"
    malformed_response = "malformed_response"
    malformed_uri = "malformed_uri"


class AIResult(BaseModel):
    """
    Result of one AI client operation.

    text is always what a caller should display: model output on success, the operation's
    fallback string on failure, the "No response" placeholder for an unusable response body.
    It is None only for operations that intentionally produce nothing.
    """

    outcome: AIOutcome
    text: str | None = None
    error: AIErrorKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == AIOutcome.ok

    @classmethod
    def success(cls, text: str) -> "AIResult":
        return cls(outcome=AIOutcome.ok, text=text)

    @classmethod
    def no_result(cls) -> "AIResult":
        return cls(outcome=AIOutcome.empty)

    @classmethod
    def failure(cls, kind: AIErrorKind, fallback: str, detail: str | None = None) -> "AIResult":
        return cls(outcome=AIOutcome.failed, text=fallback, error=kind, detail=detail)
