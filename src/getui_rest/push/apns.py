"""Push – APNs delivery metadata (``push_info``).

Field meanings follow Apple's payload key reference; wire names are the
provider's, including its ``titile-loc-key`` spelling.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from getui_rest.kernel.errors import ValidationError
from getui_rest.kernel.serialization import compact

__all__ = ["MAX_MULTIMEDIA", "Alert", "ApnsInfo", "Multimedia", "MultimediaType"]

MAX_MULTIMEDIA = 3


@dataclass
class Alert:
    """The visible part of an iOS notification."""

    body: str | None = None
    action_loc_key: str | None = None
    loc_key: str | None = None
    loc_args: str | None = None
    launch_image: str | None = None
    title: str | None = None
    title_loc_key: str | None = None
    title_loc_args: str | None = None
    subtitle: str | None = None
    subtitle_loc_key: str | None = None
    subtitle_loc_args: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return compact({
            "body": self.body,
            "action-loc-key": self.action_loc_key,
            "loc-key": self.loc_key,
            "loc-args": self.loc_args,
            "launch-image": self.launch_image,
            "title": self.title,
            "titile-loc-key": self.title_loc_key,
            "title-loc-args": self.title_loc_args,
            "subtitle": self.subtitle,
            "subtitle-loc-key": self.subtitle_loc_key,
            "subtitle-loc-args": self.subtitle_loc_args,
        })


class MultimediaType(IntEnum):
    IMAGE = 1
    AUDIO = 2
    VIDEO = 3


@dataclass
class Multimedia:
    """Rich-media attachment; with ``only_wifi`` set it degrades to a plain notification off wifi."""

    url: str
    type: MultimediaType
    only_wifi: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return compact({
            "url": self.url,
            "type": int(self.type),
            "only_wifi": self.only_wifi,
        })


@dataclass
class ApnsInfo:
    """iOS delivery options sent as ``push_info``.

    ``auto_badge`` is an expression such as ``"+1"``, ``"-1"`` or ``"1"``
    whose result replaces the badge. ``content_available=1`` lets the app
    process the payload in the background. ``custom_msg`` keys are merged
    at the top level of the payload; ``aps`` and ``multimedia`` always
    reflect the computed values, whatever ``custom_msg`` holds.
    """

    alert: Alert | None = None
    auto_badge: str | None = "+1"
    sound: str | None = None  # "com.gexin.ios.silence" for silent
    content_available: int | None = 1
    category: str | None = None
    multimedias: list[Multimedia] = field(default_factory=list)
    custom_msg: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        if len(self.multimedias) > MAX_MULTIMEDIA:
            raise ValidationError(
                f"At most {MAX_MULTIMEDIA} multimedia attachments are allowed",
                errors=[{"field": "multimedias", "count": len(self.multimedias)}],
            )
        aps = compact({
            "alert": self.alert.to_dict() if self.alert is not None else None,
            "autoBadge": self.auto_badge,
            "sound": self.sound,
            "content-available": self.content_available,
            "category": self.category,
        })
        payload = dict(self.custom_msg)
        payload["aps"] = aps
        payload["multimedia"] = [m.to_dict() for m in self.multimedias]
        return payload
