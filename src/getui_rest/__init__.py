"""
getui_rest – async client for the Getui push REST API.

Import path convention::

    from getui_rest.push import GetuiClient, SingleMessage, TransmissionTemplate
    from getui_rest.kernel.errors import GetuiError
    from getui_rest.config import GetuiSettings, EnvSettingsLoader
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
