"""Data URI encoding and parsing for product images."""

import base64
import binascii

from pydantic import BaseModel, ConfigDict

from floral_admin.core.errors import MalformedURIError

DATA_URI_PREFIX = "data:"
BASE64_MARKER = ";base64"


class DataURIParts(BaseModel):
    """Mime type and base64 payload of a data URI."""

    model_config = ConfigDict(frozen=True)

    mime_type: str
    payload: str


class EncodedImage(BaseModel):
    """A normalized product image: JPEG data URI plus its pixel size. Immutable."""

    model_config = ConfigDict(frozen=True)

    data_uri: str
    width: int
    height: int

    @property
    def mime_type(self) -> str:
        return parse_data_uri(self.data_uri).mime_type

    def to_bytes(self) -> bytes:
        """Decode the base64 payload back to raw image bytes."""
        return base64.b64decode(parse_data_uri(self.data_uri).payload)


def encode_data_uri(data: bytes, mime_type: str) -> str:
    """Return data:<mime_type>;base64,<payload> for raw bytes."""
    b64 = base64.b64encode(data).decode("ascii")
    return f"{DATA_URI_PREFIX}{mime_type}{BASE64_MARKER},{b64}"


def parse_data_uri(uri: str) -> DataURIParts:
    """
    Split a data:<mime>;base64,<payload> string into its parts.

    Raises MalformedURIError when the prefix, mime type, base64 marker or payload is missing,
    or when the payload is not valid base64.
    """
    if not isinstance(uri, str) or not uri.startswith(DATA_URI_PREFIX):
        raise MalformedURIError("data URI must start with 'data:'")
    header, sep, payload = uri[len(DATA_URI_PREFIX):].partition(",")
    if not sep:
        raise MalformedURIError("data URI has no ',' separating header and payload")
    mime_type, marker_sep, params = header.partition(";")
    mime_type = mime_type.strip()
    if not mime_type or "/" not in mime_type:
        raise MalformedURIError(f"data URI has no valid mime type: {mime_type!r}")
    if not marker_sep or "base64" not in (p.strip() for p in params.split(";")):
        raise MalformedURIError("data URI is not base64-encoded")
    if not payload:
        raise MalformedURIError("data URI payload is empty")
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedURIError(f"data URI payload is not valid base64: {e}") from e
    return DataURIParts(mime_type=mime_type, payload=payload)
