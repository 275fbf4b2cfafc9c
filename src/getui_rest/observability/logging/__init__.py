"""Observability – structured logging helpers."""
from getui_rest.observability.logging.factory import JsonLoggerFactory
from getui_rest.observability.logging.filters import SensitiveFieldsFilter
from getui_rest.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "SensitiveFieldsFilter", "get_logger"]
