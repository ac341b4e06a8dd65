"""Floral AI client backed by the Google Generative Language REST API (generateContent).

Calls POST {base_url}/models/{model}:generateContent?key=<GEMINI_API_KEY> directly with
requests; no SDK. One request per operation: no retry, caching or streaming.

Uses a persistent requests.Session with connection pooling so repeated captions from
the admin panel reuse the TLS connection.
"""

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from floral_admin.ai.client_base import BaseFloralAIClient, ImageInput, as_data_uri
from floral_admin.ai.prompts import (
    ANALYZE_FALLBACK,
    FLORAL_ARCHITECT_PROMPT,
    NO_RESPONSE_TEXT,
    REFINE_FALLBACK,
    build_refine_prompt,
    build_sentiment_prompt,
    sentiment_fallback,
)
from floral_admin.ai.schema import AIErrorKind, AIOutcome, AIResult, ModelCard
from floral_admin.core.config import Settings, get_config
from floral_admin.core.data_uri import parse_data_uri
from floral_admin.core.errors import MalformedURIError

_log = logging.getLogger(__name__)


def build_generate_payload(prompt: str, image_data_uri: str | None = None) -> dict[str, Any]:
    """
    Build the generateContent JSON body: one user turn with a text part and,
    when an image is given, an inline_data part. Raises MalformedURIError for a bad data URI.
    """
    parts: list[dict[str, Any]] = [{"text": prompt}]
    if image_data_uri is not None:
        uri_parts = parse_data_uri(image_data_uri)
        parts.append(
            {
                "inline_data": {
                    "mime_type": uri_parts.mime_type,
                    "data": uri_parts.payload,
                }
            }
        )
    return {"contents": [{"role": "user", "parts": parts}]}


def extract_text(data: Any) -> str | None:
    """Return candidates[0].content.parts[0].text, or None when the path is absent or empty."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text:
        return None
    return text


def _error_message(resp: requests.Response) -> str:
    """Message from an error response body ({"error": {"message": ...}}), else a generic one."""
    try:
        body = resp.json()
        message = body["error"]["message"]
        if isinstance(message, str) and message:
            return message
    except (ValueError, KeyError, TypeError):
        pass
    return f"Gemini API error (HTTP {resp.status_code})"


class GeminiFloralClient(BaseFloralAIClient):
    """Floral AI client that calls Gemini generateContent over HTTPS."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        cfg = settings or get_config()
        self._api_key = cfg.gemini_api_key
        self._model = cfg.gemini_model
        self._base_url = cfg.gemini_base_url.rstrip("/")
        self._timeout = cfg.request_timeout_seconds
        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=2, pool_maxsize=4)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self._session = session

    def get_model_card(self) -> ModelCard:
        return ModelCard(name="gemini", version=self._model)

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    def _redact(self, message: str) -> str:
        if self._api_key:
            return message.replace(self._api_key, "***")
        return message

    def _post(self, payload: dict[str, Any]) -> requests.Response:
        """POST the payload to generateContent. Raises requests.HTTPError on non-2xx."""
        resp = self._session.post(
            self.endpoint,
            params={"key": self._api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=self._timeout,
        )
        if not resp.ok:
            raise requests.HTTPError(_error_message(resp), response=resp)
        return resp

    def _run(self, operation: str, prompt: str, image: ImageInput | None, fallback: str) -> AIResult:
        if not self._api_key:
            _log.error("%s: GEMINI_API_KEY is not configured", operation)
            return AIResult.failure(AIErrorKind.credential_missing, fallback, "API key missing")

        try:
            payload = build_generate_payload(prompt, as_data_uri(image) if image is not None else None)
        except MalformedURIError as e:
            _log.error("%s: invalid image data URI: %s", operation, e)
            return AIResult.failure(AIErrorKind.malformed_uri, fallback, str(e))

        try:
            resp = self._post(payload)
        except requests.RequestException as e:
            detail = self._redact(str(e))
            _log.error("%s: Gemini request failed: %s", operation, detail)
            return AIResult.failure(AIErrorKind.transport, fallback, detail)

        try:
            data = resp.json()
        except ValueError as e:
            _log.warning("%s: Gemini response is not JSON: %s", operation, e)
            return AIResult(
                outcome=AIOutcome.empty,
                text=NO_RESPONSE_TEXT,
                error=AIErrorKind.malformed_response,
                detail=str(e),
            )

        text = extract_text(data)
        if text is None:
            _log.warning("%s: Gemini response has no candidate text", operation)
            return AIResult(
                outcome=AIOutcome.empty,
                text=NO_RESPONSE_TEXT,
                error=AIErrorKind.malformed_response,
                detail="candidates[0].content.parts[0].text missing",
            )
        _log.debug("%s: received %s characters", operation, len(text))
        return AIResult.success(text)

    def analyze_floral_image(self, image: ImageInput) -> AIResult:
        return self._run("analyze_floral_image", FLORAL_ARCHITECT_PROMPT, image, ANALYZE_FALLBACK)

    def refine_floral_prompt(self, image: ImageInput, previous_analysis: str | None, refinement: str) -> AIResult:
        prompt = build_refine_prompt(previous_analysis, refinement)
        return self._run("refine_floral_prompt", prompt, image, REFINE_FALLBACK)

    def generate_sentiment_message(self, recipient: str, occasion: str, tone: str) -> AIResult:
        prompt = build_sentiment_prompt(recipient, occasion, tone)
        return self._run("generate_sentiment_message", prompt, None, sentiment_fallback(recipient, occasion))
