"""Factory for floral AI clients."""

from floral_admin.ai.client_base import BaseFloralAIClient


def get_ai_client(client_name: str) -> BaseFloralAIClient:
    """Return an AI client by name ('gemini' or 'mock')."""
    if client_name == "mock":
        from floral_admin.ai.client_base import MockFloralAIClient

        return MockFloralAIClient()
    if client_name == "gemini":
        from floral_admin.ai.gemini_client import GeminiFloralClient

        return GeminiFloralClient()
    raise ValueError(f"Unknown AI client: {client_name}")
