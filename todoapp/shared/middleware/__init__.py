from .error_handler import configure_error_handling
from .request_logger import configure_request_logging

__all__ = ["configure_error_handling", "configure_request_logging"]
