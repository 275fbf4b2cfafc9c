"""HTTP adapter – async httpx client wrapper."""
from getui_rest.adapters.http.client import HttpxHttpClient

__all__ = ["HttpxHttpClient"]
