from swift_backend.managers.logging_manager import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
