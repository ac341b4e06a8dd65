"""Routing of produced images to the new-product draft or the product being edited."""

from enum import Enum


class CaptureTarget(str, Enum):
    new = "new"
    editing = "editing"


def select_target(editing_id: str | None) -> CaptureTarget:
    """Editing target when a product is being edited, else the new-product draft."""
    return CaptureTarget.editing if editing_id else CaptureTarget.new
