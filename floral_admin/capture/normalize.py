"""Normalize product photos: bound the longer edge, encode as a JPEG data URI."""

import io
import logging
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from floral_admin.core.config import DEFAULT_JPEG_QUALITY, DEFAULT_MAX_IMAGE_EDGE, get_config
from floral_admin.core.data_uri import EncodedImage, encode_data_uri
from floral_admin.core.errors import ImageDecodeError
from floral_admin.core.io_utils import file_non_empty

_log = logging.getLogger(__name__)

JPEG_MIME = "image/jpeg"


def compute_bounded_size(width: int, height: int, max_edge: int = DEFAULT_MAX_IMAGE_EDGE) -> tuple[int, int]:
    """
    Return (width, height) scaled so the longer edge is at most max_edge, aspect ratio preserved.

    Landscape images (width > height) are bounded by width; square and portrait images by height.
    The scaled edge is truncated to an integer like a raster surface would, and never drops below 1.
    Sizes that already fit are returned unchanged (no upscaling).
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"image dimensions must be positive, got {width}x{height}")
    if max_edge < 1:
        raise ValueError("max_edge must be >= 1")
    if width > height:
        if width > max_edge:
            height = max(1, height * max_edge // width)
            width = max_edge
    elif height > max_edge:
        width = max(1, width * max_edge // height)
        height = max_edge
    return width, height


def _flatten_to_rgb(image: Image.Image) -> Image.Image:
    """Convert to RGB; transparent pixels are composited onto white."""
    if image.mode == "RGB":
        return image
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return image.convert("RGB")


def encode_jpeg(image: Image.Image, quality: int = DEFAULT_JPEG_QUALITY) -> EncodedImage:
    """Encode a PIL image as a JPEG data URI at the given quality."""
    rgb = _flatten_to_rgb(image)
    buffered = io.BytesIO()
    rgb.save(buffered, format="JPEG", quality=quality)
    return EncodedImage(
        data_uri=encode_data_uri(buffered.getvalue(), JPEG_MIME),
        width=rgb.width,
        height=rgb.height,
    )


def normalize_image(
    image: Image.Image,
    *,
    max_edge: int | None = None,
    quality: int | None = None,
) -> EncodedImage:
    """Resize (only if needed) with a high-quality filter and encode to JPEG."""
    cfg = get_config()
    max_edge = max_edge if max_edge is not None else cfg.max_image_edge
    quality = quality if quality is not None else cfg.jpeg_quality

    target = compute_bounded_size(image.width, image.height, max_edge)
    if target != image.size:
        _log.debug("Resizing image %sx%s -> %sx%s", image.width, image.height, *target)
        image = image.resize(target, Image.Resampling.LANCZOS)
    return encode_jpeg(image, quality)


def normalize_image_bytes(
    data: bytes,
    *,
    max_edge: int | None = None,
    quality: int | None = None,
) -> EncodedImage:
    """Decode uploaded bytes (any Pillow-readable format), apply EXIF orientation, normalize."""
    if not data:
        raise ImageDecodeError("uploaded image is empty")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            oriented = ImageOps.exif_transpose(img)
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(f"cannot decode image: {e}") from e
    return normalize_image(oriented, max_edge=max_edge, quality=quality)


def normalize_image_file(
    path: Path | str,
    *,
    max_edge: int | None = None,
    quality: int | None = None,
) -> EncodedImage:
    """Read an image file from disk and normalize it."""
    path = Path(path)
    if not file_non_empty(path):
        raise ImageDecodeError(f"image file missing or empty: {path}")
    encoded = normalize_image_bytes(path.read_bytes(), max_edge=max_edge, quality=quality)
    _log.info("Normalized %s to %sx%s", path.name, encoded.width, encoded.height)
    return encoded
