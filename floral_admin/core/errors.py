"""Exceptions raised by the capture, image and catalog layers."""


class DeviceUnavailableError(RuntimeError):
    """Raised when the camera cannot be opened or read (missing device or permission denied)."""

    pass


class MalformedURIError(ValueError):
    """Raised when a string is not a base64 data URI of the form data:<mime>;base64,<payload>."""

    pass


class ImageDecodeError(ValueError):
    """Raised when uploaded bytes cannot be decoded as an image."""

    pass


class DraftIncompleteError(ValueError):
    """Raised when a product draft is published without name, price or image."""

    pass
