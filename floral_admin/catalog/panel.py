"""AdminPanel: draft state, image routing and catalog callback calls for the storefront admin."""

import logging
import time
from pathlib import Path
from typing import Callable

from floral_admin.ai.client_base import BaseFloralAIClient
from floral_admin.ai.schema import AIResult
from floral_admin.capture.camera import CaptureSession
from floral_admin.capture.normalize import normalize_image_file
from floral_admin.capture.targets import CaptureTarget, select_target
from floral_admin.catalog.callbacks import CatalogCallbacks
from floral_admin.catalog.models import Offer, Product, ProductDraft
from floral_admin.core.data_uri import EncodedImage
from floral_admin.core.errors import DeviceUnavailableError, DraftIncompleteError

_log = logging.getLogger(__name__)

DRAFT_INCOMPLETE_MESSAGE = "Completa todos los datos y la imagen antes de publicar."
NO_IMAGE_MESSAGE = "No hay imagen para analizar."


class AdminPanel:
    """
    Admin-side state for the catalog: the new-product draft, the pending edit and the last AI analysis.

    Every produced image goes to exactly one draft, chosen by the explicit target
    (default: the edit when a product is being edited, else the new-product draft).
    Persistence is delegated to the catalog callbacks.
    """

    def __init__(
        self,
        callbacks: CatalogCallbacks,
        admin_password: str,
        *,
        ai_client: BaseFloralAIClient | None = None,
        capture_factory: Callable[[], CaptureSession] = CaptureSession,
    ) -> None:
        self._callbacks = callbacks
        self._admin_password = admin_password
        self._ai_client = ai_client
        self._capture_factory = capture_factory
        self.new_draft = ProductDraft.blank()
        self.edit_fields = ProductDraft()
        self._editing: Product | None = None
        self.last_analysis: AIResult | None = None

    # --- access ---

    def login(self, password: str) -> bool:
        ok = password == self._admin_password
        if not ok:
            _log.info("Rejected admin login")
        return ok

    def update_password(self, new_password: str) -> bool:
        """Store and forward a new password. Empty input is ignored (returns False)."""
        if not new_password:
            return False
        self._callbacks.update_password(new_password)
        self._admin_password = new_password
        return True

    # --- editing ---

    @property
    def editing_id(self) -> str | None:
        return self._editing.id if self._editing is not None else None

    def start_edit(self, product: Product) -> None:
        self._editing = product
        self.edit_fields = ProductDraft()
        self.last_analysis = None

    def cancel_edit(self) -> None:
        self._editing = None
        self.edit_fields = ProductDraft()

    def save_edit(self) -> Product:
        """Merge pending fields into the edited product, send it to update_product and leave edit mode."""
        if self._editing is None:
            raise ValueError("No product is being edited")
        changes = self.edit_fields.model_dump(exclude_none=True)
        updated = Product.model_validate({**self._editing.model_dump(), **changes})
        self._callbacks.update_product(updated)
        self.cancel_edit()
        return updated

    # --- images ---

    def draft_for(self, target: CaptureTarget) -> ProductDraft:
        return self.edit_fields if target == CaptureTarget.editing else self.new_draft

    def apply_image(self, image: EncodedImage | str, target: CaptureTarget | None = None) -> CaptureTarget:
        """Replace the image of the target draft. A new image invalidates the last analysis."""
        if target is None:
            target = select_target(self.editing_id)
        if target == CaptureTarget.editing and self._editing is None:
            raise ValueError("No product is being edited")
        data_uri = image.data_uri if isinstance(image, EncodedImage) else image
        self.draft_for(target).image = data_uri
        self.last_analysis = None
        return target

    def upload_image(self, path: Path | str, target: CaptureTarget | None = None) -> EncodedImage:
        image = normalize_image_file(path)
        self.apply_image(image, target)
        return image

    def capture_from_camera(self, target: CaptureTarget | None = None) -> EncodedImage:
        """Open the camera, take one still and route it. The camera is closed on every path."""
        session = self._capture_factory()
        try:
            with session:
                image = session.capture_still()
        except DeviceUnavailableError as e:
            _log.warning("Camera capture failed: %s", e)
            raise
        self.apply_image(image, target)
        return image

    # --- catalog ---

    def publish_new_product(self) -> Product:
        """Validate the new-product draft, send it to add_product and reset the form."""
        missing = self.new_draft.missing_fields()
        if missing:
            _log.info("Publish refused, missing: %s", ", ".join(missing))
            raise DraftIncompleteError(DRAFT_INCOMPLETE_MESSAGE)
        fields = self.new_draft.model_dump(exclude_none=True)
        product = Product.model_validate({**fields, "id": str(int(time.time() * 1000))})
        self._callbacks.add_product(product)
        self.new_draft = ProductDraft.blank()
        self.last_analysis = None
        return product

    def delete_product(self, product_id: str) -> None:
        if self.editing_id == product_id:
            self.cancel_edit()
        self._callbacks.delete_product(product_id)

    def reset_products(self) -> None:
        self.cancel_edit()
        self._callbacks.reset_products()

    def add_offer(self, offer: Offer) -> None:
        self._callbacks.add_offer(offer)

    def delete_offer(self, offer_id: str) -> None:
        self._callbacks.delete_offer(offer_id)

    # --- AI ---

    def _require_ai(self) -> BaseFloralAIClient:
        if self._ai_client is None:
            raise RuntimeError("AdminPanel has no AI client configured")
        return self._ai_client

    def _image_for(self, target: CaptureTarget | None) -> str:
        if target is None:
            target = select_target(self.editing_id)
        image = self.draft_for(target).image
        if not image:
            raise ValueError(NO_IMAGE_MESSAGE)
        return image

    def analyze_current_image(self, target: CaptureTarget | None = None) -> AIResult:
        result = self._require_ai().analyze_floral_image(self._image_for(target))
        self.last_analysis = result
        return result

    def refine_current_analysis(self, instruction: str, target: CaptureTarget | None = None) -> AIResult:
        """Re-send the current image with the previous caption (if it succeeded) and the instruction."""
        previous = self.last_analysis.text if self.last_analysis is not None and self.last_analysis.ok else None
        result = self._require_ai().refine_floral_prompt(self._image_for(target), previous, instruction)
        self.last_analysis = result
        return result
