from mvcgem.logger.structured_logger import StructuredLogger, create_logger

__all__ = ["StructuredLogger", "create_logger"]
