"""Push – notification bar styles.

Each concrete style carries a fixed numeric ``type`` assigned by the
provider (0, 1, 4, 6); the gaps are provider styles this library does not
model.
"""
from __future__ import annotations

import abc
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, ClassVar, Union

from getui_rest.kernel.serialization import compact

__all__ = [
    "BaseStyle",
    "ExpandStyle",
    "GetuiStyle",
    "ImageStyle",
    "Style",
    "StyleType",
    "SystemStyle",
]


class StyleType(IntEnum):
    SYSTEM = 0
    GETUI = 1
    IMAGE = 4
    EXPAND = 6


@dataclass
class BaseStyle(abc.ABC):
    """Fields shared by every style: ring / vibrate / clearable flags and the icon."""

    STYLE_TYPE: ClassVar[StyleType]

    is_ring: bool = True
    is_vibrate: bool = True
    is_clearable: bool = True
    logo: str | None = None  # icon file bundled with the app, e.g. "push.png"

    @property
    def type(self) -> StyleType:
        return self.STYLE_TYPE

    def to_dict(self) -> dict[str, Any]:
        return compact({
            "is_ring": self.is_ring,
            "is_vibrate": self.is_vibrate,
            "is_clearable": self.is_clearable,
            "logo": self.logo,
            "type": int(self.type),
            **self._variant_fields(),
        })

    @abc.abstractmethod
    def _variant_fields(self) -> dict[str, Any]: ...


@dataclass
class SystemStyle(BaseStyle):
    """Plain system notification."""

    STYLE_TYPE: ClassVar[StyleType] = StyleType.SYSTEM

    text: str | None = None
    title: str | None = None

    def _variant_fields(self) -> dict[str, Any]:
        return {"text": self.text, "title": self.title}


@dataclass
class GetuiStyle(BaseStyle):
    """Provider-branded notification with a remote icon."""

    STYLE_TYPE: ClassVar[StyleType] = StyleType.GETUI

    text: str | None = None
    title: str | None = None
    logo_url: str | None = None

    def _variant_fields(self) -> dict[str, Any]:
        return {"text": self.text, "title": self.title, "logourl": self.logo_url}


@dataclass
class ImageStyle(BaseStyle):
    """Background-image notification; the banner is fetched from ``banner_url``."""

    STYLE_TYPE: ClassVar[StyleType] = StyleType.IMAGE

    banner_url: str | None = None

    def _variant_fields(self) -> dict[str, Any]:
        return {"banner_url": self.banner_url}


@dataclass
class ExpandStyle(BaseStyle):
    """Expandable notification.

    ``big_style`` selects the expanded layout (``"1"`` big image, ``"2"``
    long text, ``"3"`` small image banner) and decides which of
    ``big_image_url`` / ``big_text`` / ``banner_url`` the device uses.
    """

    STYLE_TYPE: ClassVar[StyleType] = StyleType.EXPAND

    text: str | None = None
    title: str | None = None
    logo_url: str | None = None
    big_style: str | None = None
    big_image_url: str | None = None
    big_text: str | None = None
    banner_url: str | None = None

    def _variant_fields(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "title": self.title,
            "logourl": self.logo_url,
            "big_style": self.big_style,
            "big_image_url": self.big_image_url,
            "big_text": self.big_text,
            "banner_url": self.banner_url,
        }


Style = Union[SystemStyle, GetuiStyle, ImageStyle, ExpandStyle]
