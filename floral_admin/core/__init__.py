from floral_admin.core.config import get_config
from floral_admin.core.logging import setup_logging

__all__ = ["get_config", "setup_logging"]
