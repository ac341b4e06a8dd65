"""AI module: result contracts, prompts and the Gemini-backed floral client."""

from floral_admin.ai.schema import AIErrorKind, AIOutcome, AIResult, ModelCard
from floral_admin.ai.client_base import BaseFloralAIClient, MockFloralAIClient
from floral_admin.ai.factory import get_ai_client

__all__ = [
    "AIErrorKind",
    "AIOutcome",
    "AIResult",
    "BaseFloralAIClient",
    "MockFloralAIClient",
    "ModelCard",
    "get_ai_client",
]
