"""CaptureSession: exclusive ownership of one camera device for still capture.

The session holds at most one OpenCV VideoCapture handle. open() always releases
whatever is currently open before requesting the device again, and close() is
idempotent, so every exit path (cancel, capture, error, context exit) can call it.
"""

import logging
from typing import Any, Callable

import cv2
from PIL import Image

from floral_admin.capture.normalize import encode_jpeg
from floral_admin.core.config import get_config
from floral_admin.core.data_uri import EncodedImage
from floral_admin.core.errors import DeviceUnavailableError

_log = logging.getLogger(__name__)

DeviceFactory = Callable[[int], Any]


class CaptureSession:
    """
    Camera capture session (device handle + frame read/encode).

    Usage:
        with CaptureSession() as session:
            image = session.capture_still()
    """

    def __init__(
        self,
        camera_index: int | None = None,
        *,
        quality: int | None = None,
        device_factory: DeviceFactory | None = None,
    ) -> None:
        cfg = get_config()
        self._camera_index = camera_index if camera_index is not None else cfg.camera_index
        self._quality = quality if quality is not None else cfg.jpeg_quality
        self._device_factory: DeviceFactory = device_factory or cv2.VideoCapture
        self._device: Any | None = None

    @property
    def is_open(self) -> bool:
        return self._device is not None

    def open(self) -> None:
        """Acquire the camera. Raises DeviceUnavailableError and stays closed if it cannot be opened."""
        self.close()
        try:
            device = self._device_factory(self._camera_index)
        except cv2.error as e:
            _log.warning("Camera %s could not be created: %s", self._camera_index, e)
            raise DeviceUnavailableError(f"Camera {self._camera_index} is unavailable: {e}") from e
        if not device.isOpened():
            device.release()
            _log.warning("Camera %s is not available (missing device or permission denied)", self._camera_index)
            raise DeviceUnavailableError(f"Camera {self._camera_index} is unavailable")
        self._device = device
        _log.debug("Camera %s opened", self._camera_index)

    def close(self) -> None:
        """Release the camera if open. Safe to call any number of times."""
        device = self._device
        if device is None:
            return
        self._device = None
        device.release()
        _log.debug("Camera %s released", self._camera_index)

    def capture_still(self) -> EncodedImage:
        """
        Read one frame at the source resolution, encode it as JPEG and close the camera.

        The camera is released whether or not the read succeeds.
        """
        if self._device is None:
            raise DeviceUnavailableError("Camera is not open")
        try:
            ok, frame = self._device.read()
            if not ok or frame is None:
                raise DeviceUnavailableError(f"Camera {self._camera_index} returned no frame")
            rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            image = Image.fromarray(rgb)
            encoded = encode_jpeg(image, self._quality)
        finally:
            self.close()
        _log.info("Captured still %sx%s from camera %s", encoded.width, encoded.height, self._camera_index)
        return encoded

    def __enter__(self) -> "CaptureSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
