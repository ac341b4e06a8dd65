"""Admin panel API: image normalization and AI helpers for the storefront admin UI."""

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from pydantic import BaseModel, Field

from floral_admin.ai.client_base import BaseFloralAIClient
from floral_admin.ai.factory import get_ai_client
from floral_admin.ai.schema import AIResult
from floral_admin.capture.normalize import normalize_image_bytes
from floral_admin.core.config import get_config
from floral_admin.core.data_uri import EncodedImage
from floral_admin.core.errors import ImageDecodeError

_log = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _get_ai_client() -> BaseFloralAIClient:
    return get_ai_client(get_config().ai_client)


app = FastAPI(title="Floral Admin")


class AnalyzeIn(BaseModel):
    image: str


class RefineIn(BaseModel):
    image: str
    refinement: str = Field(min_length=1)
    previous_analysis: str | None = None


class SentimentIn(BaseModel):
    recipient: str = Field(min_length=1)
    occasion: str = Field(min_length=1)
    tone: str = "romántico"


class InspirationIn(BaseModel):
    prompt: str


@app.get("/api/health")
def health(client: BaseFloralAIClient = Depends(_get_ai_client)) -> dict:
    card = client.get_model_card()
    return {"status": "ok", "ai_client": card.name, "model": card.version}


@app.post("/api/images/normalize", response_model=EncodedImage)
def normalize_upload(image: UploadFile = File(...)) -> EncodedImage:
    """Bound the uploaded photo to the configured max edge and return it as a JPEG data URI."""
    data = image.file.read()
    try:
        encoded = normalize_image_bytes(data)
    except ImageDecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _log.info("Normalized upload %s to %sx%s", image.filename, encoded.width, encoded.height)
    return encoded


@app.post("/api/ai/analyze", response_model=AIResult)
def analyze(body: AnalyzeIn, client: BaseFloralAIClient = Depends(_get_ai_client)) -> AIResult:
    return client.analyze_floral_image(body.image)


@app.post("/api/ai/refine", response_model=AIResult)
def refine(body: RefineIn, client: BaseFloralAIClient = Depends(_get_ai_client)) -> AIResult:
    return client.refine_floral_prompt(body.image, body.previous_analysis, body.refinement)


@app.post("/api/ai/sentiment", response_model=AIResult)
def sentiment(body: SentimentIn, client: BaseFloralAIClient = Depends(_get_ai_client)) -> AIResult:
    return client.generate_sentiment_message(body.recipient, body.occasion, body.tone)


@app.post("/api/ai/inspiration", response_model=AIResult)
def inspiration(body: InspirationIn, client: BaseFloralAIClient = Depends(_get_ai_client)) -> AIResult:
    return client.generate_floral_inspiration(body.prompt)
