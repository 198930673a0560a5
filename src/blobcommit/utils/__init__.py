from .hexcodec import from_hex, to_hex
from .logging import configure_logging, get_logger

__all__ = ["from_hex", "to_hex", "configure_logging", "get_logger"]
