"""Capture module: camera stills and uploaded-file normalization."""

from floral_admin.capture.camera import CaptureSession
from floral_admin.capture.normalize import (
    compute_bounded_size,
    encode_jpeg,
    normalize_image,
    normalize_image_bytes,
    normalize_image_file,
)
from floral_admin.capture.targets import CaptureTarget, select_target

__all__ = [
    "CaptureSession",
    "CaptureTarget",
    "compute_bounded_size",
    "encode_jpeg",
    "normalize_image",
    "normalize_image_bytes",
    "normalize_image_file",
    "select_target",
]
