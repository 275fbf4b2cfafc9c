"""Push – message templates.

The template decides what the device does with a message; its ``type`` is
also the message's ``msgtype`` and the key under which the serialized
template travels in a push body.
"""
from __future__ import annotations

import abc
import json
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Union

from getui_rest.kernel.serialization import compact
from getui_rest.push.style import BaseStyle

__all__ = [
    "BaseTemplate",
    "LinkTemplate",
    "NotificationTemplate",
    "NotyPopLoadTemplate",
    "Template",
    "TemplateType",
    "TransmissionTemplate",
    "serialize_template",
]

DURATION_FORMAT = "%Y-%m-%d %H:%M:%S"


class TemplateType(str, Enum):
    NOTIFICATION = "notification"
    LINK = "link"
    NOTYPOPLOAD = "notypopload"
    TRANSMISSION = "transmission"


def _format_duration(value: str | datetime | None) -> str | None:
    if isinstance(value, datetime):
        return value.strftime(DURATION_FORMAT)
    return value


def _encode_content(content: str | Mapping[str, Any] | None) -> str | None:
    if content is None or isinstance(content, str):
        return content
    return json.dumps(content, ensure_ascii=False, separators=(",", ":"))


@dataclass
class BaseTemplate(abc.ABC):
    """Display window shared by all templates (``yyyy-MM-dd HH:mm:ss``)."""

    TEMPLATE_TYPE: ClassVar[TemplateType]

    duration_begin: str | datetime | None = None
    duration_end: str | datetime | None = None

    @property
    def type(self) -> TemplateType:
        return self.TEMPLATE_TYPE

    def to_dict(self) -> dict[str, Any]:
        return compact({
            "duration_begin": _format_duration(self.duration_begin),
            "duration_end": _format_duration(self.duration_end),
            **self._variant_fields(),
        })

    @abc.abstractmethod
    def _variant_fields(self) -> dict[str, Any]: ...


@dataclass
class NotificationTemplate(BaseTemplate):
    """Notification bar entry that opens the app when tapped."""

    TEMPLATE_TYPE: ClassVar[TemplateType] = TemplateType.NOTIFICATION

    transmission_type: bool = False  # True launches the app immediately
    transmission_content: str | Mapping[str, Any] | None = None
    style: BaseStyle | None = None

    def _variant_fields(self) -> dict[str, Any]:
        return {
            "transmission_type": self.transmission_type,
            "transmission_content": _encode_content(self.transmission_content),
            "style": self.style.to_dict() if self.style is not None else None,
        }


@dataclass
class LinkTemplate(BaseTemplate):
    """Notification bar entry that opens ``url`` in a browser when tapped."""

    TEMPLATE_TYPE: ClassVar[TemplateType] = TemplateType.LINK

    url: str | None = None
    style: BaseStyle | None = None

    def _variant_fields(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "style": self.style.to_dict() if self.style is not None else None,
        }


@dataclass
class NotyPopLoadTemplate(BaseTemplate):
    """Notification that pops a download dialog for an installable package."""

    TEMPLATE_TYPE: ClassVar[TemplateType] = TemplateType.NOTYPOPLOAD

    noty_icon: str | None = None
    noty_title: str | None = None
    noty_content: str | None = None
    pop_title: str | None = None
    pop_content: str | None = None
    pop_image: str | None = None
    pop_button_1: str | None = None  # left button
    pop_button_2: str | None = None  # right button
    load_icon: str | None = None
    load_title: str | None = None
    load_url: str | None = None
    is_auto_install: bool | None = None
    is_actived: bool | None = None  # launch after install
    android_mark: str | None = None
    symbian_mark: str | None = None
    iphone_mark: str | None = None

    def _variant_fields(self) -> dict[str, Any]:
        return {
            "notyicon": self.noty_icon,
            "notytitle": self.noty_title,
            "notycontent": self.noty_content,
            "poptitle": self.pop_title,
            "popcontent": self.pop_content,
            "popimage": self.pop_image,
            "popbutton1": self.pop_button_1,
            "popbutton2": self.pop_button_2,
            "loadicon": self.load_icon,
            "loadtitle": self.load_title,
            "loadurl": self.load_url,
            "is_autoinstall": self.is_auto_install,
            "is_actived": self.is_actived,
            "androidmark": self.android_mark,
            "symbianmark": self.symbian_mark,
            "iphonemark": self.iphone_mark,
        }


@dataclass
class TransmissionTemplate(BaseTemplate):
    """Silent pass-through payload; the app decides how (or whether) to show it.

    Also the template to use for iOS pushes. A mapping given as
    ``transmission_content`` is sent as compact JSON text.
    """

    TEMPLATE_TYPE: ClassVar[TemplateType] = TemplateType.TRANSMISSION

    transmission_type: bool = False
    transmission_content: str | Mapping[str, Any] | None = None

    def _variant_fields(self) -> dict[str, Any]:
        return {
            "transmission_type": self.transmission_type,
            "transmission_content": _encode_content(self.transmission_content),
        }


Template = Union[NotificationTemplate, LinkTemplate, NotyPopLoadTemplate, TransmissionTemplate]


def serialize_template(template: Template) -> dict[str, Any]:
    """Serialize one of the four provider templates; anything else is a ``TypeError``."""
    match template:
        case NotificationTemplate() | LinkTemplate() | NotyPopLoadTemplate() | TransmissionTemplate():
            return template.to_dict()
        case _:
            raise TypeError(f"Unsupported template type: {type(template).__name__}")
