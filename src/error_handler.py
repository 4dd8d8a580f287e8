"""Error payload helpers for the proxy endpoints."""
from typing import Any, Dict
import logging

from src.integrations.contracts.commerce import UpstreamError
from src.shipping.zones import NoZonesAvailable

logger = logging.getLogger(__name__)


class ErrorHandler:
    def error_payload(self, error: str, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, str]:
        """Log ``exc`` and build the ``{error, message}`` body returned to the storefront."""
        if isinstance(exc, (UpstreamError, NoZonesAvailable)):
            logger.error("%s: %s (context=%s)", error, exc, context or {})
        else:
            logger.error("Unhandled exception while proxying request: %s", exc, exc_info=True)
        return {"error": error, "message": str(exc)}


error_handler = ErrorHandler()
