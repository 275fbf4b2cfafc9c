"""Kernel types – identifiers."""
from getui_rest.kernel.types.request_id import REQUEST_ID_LENGTH, new_request_id

__all__ = ["REQUEST_ID_LENGTH", "new_request_id"]
