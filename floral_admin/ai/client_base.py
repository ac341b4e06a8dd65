"""Abstract base and mock implementation for floral AI clients."""

import logging
from abc import ABC, abstractmethod

from floral_admin.ai.prompts import sentiment_fallback
from floral_admin.ai.schema import AIResult, ModelCard
from floral_admin.core.data_uri import EncodedImage

_log = logging.getLogger(__name__)

ImageInput = EncodedImage | str


def as_data_uri(image: ImageInput) -> str:
    """Accept an EncodedImage or a raw data URI string."""
    return image.data_uri if isinstance(image, EncodedImage) else image


class BaseFloralAIClient(ABC):
    """Abstract base for product-photo captioning and card-message generation.

    Implementations never raise from the four operations: every failure is returned
    as an AIResult carrying the operation's fallback text.
    """

    @abstractmethod
    def get_model_card(self) -> ModelCard:
        """Return model identity (name, version)."""
        ...

    @abstractmethod
    def analyze_floral_image(self, image: ImageInput) -> AIResult:
        """Caption a product photo as one comma-separated English paragraph."""
        ...

    @abstractmethod
    def refine_floral_prompt(self, image: ImageInput, previous_analysis: str | None, refinement: str) -> AIResult:
        """Re-caption the photo taking the previous caption and a user instruction into account."""
        ...

    @abstractmethod
    def generate_sentiment_message(self, recipient: str, occasion: str, tone: str) -> AIResult:
        """Write a short Spanish greeting-card message."""
        ...

    def generate_floral_inspiration(self, prompt: str) -> AIResult:
        """Image synthesis is not offered by the text/vision endpoint; always returns no result."""
        _log.warning("Image generation is not supported by %s", self.get_model_card().name)
        return AIResult.no_result()


class MockFloralAIClient(BaseFloralAIClient):
    """Deterministic offline client for development and tests."""

    def get_model_card(self) -> ModelCard:
        return ModelCard(name="mock-florist", version="1.0")

    def analyze_floral_image(self, image: ImageInput) -> AIResult:
        return AIResult.success("Bouquet of red roses, soft natural light, white background, studio photo")

    def refine_floral_prompt(self, image: ImageInput, previous_analysis: str | None, refinement: str) -> AIResult:
        base = previous_analysis or "Floral arrangement"
        return AIResult.success(f"{base}, {refinement}")

    def generate_sentiment_message(self, recipient: str, occasion: str, tone: str) -> AIResult:
        return AIResult.success(sentiment_fallback(recipient, occasion))
