"""Push – messages, audience conditions and targets."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from getui_rest.kernel.serialization import compact
from getui_rest.push.apns import ApnsInfo
from getui_rest.push.template import Template, serialize_template

__all__ = [
    "AppMessage",
    "BatchTask",
    "CondOptType",
    "Condition",
    "ConditionKey",
    "ListMessage",
    "Message",
    "NetworkType",
    "SingleMessage",
    "TagMessage",
    "Target",
    "TargetList",
]

DEFAULT_OFFLINE_EXPIRE_TIME = 60 * 1000


class NetworkType(IntEnum):
    ANY = 0
    WIFI = 1
    CELLULAR = 2


@dataclass(frozen=True)
class Target:
    """A single device, by ``cid`` or by ``alias`` (set one of them)."""

    cid: str | None = None
    alias: str | None = None


@dataclass(frozen=True)
class TargetList:
    """Several devices, by a list of cids or a list of aliases (set one of them)."""

    cid: list[str] | None = None
    alias: list[str] | None = None


class Message:
    """Delivery options plus the template and APNs info of one push.

    Assigning :attr:`template` also sets :attr:`msg_type`; the two cannot
    drift apart because ``msg_type`` has no setter of its own.
    """

    def __init__(
        self,
        template: Template | None = None,
        apns_info: ApnsInfo | None = None,
        *,
        is_offline: bool = True,
        offline_expire_time: int = DEFAULT_OFFLINE_EXPIRE_TIME,
        push_network_type: NetworkType = NetworkType.ANY,
    ) -> None:
        self.is_offline = is_offline
        self.offline_expire_time = offline_expire_time
        self.push_network_type = push_network_type
        self.apns_info = apns_info
        self._template: Template | None = None
        self._msg_type: str | None = None
        if template is not None:
            self.template = template

    @property
    def template(self) -> Template | None:
        return self._template

    @template.setter
    def template(self, template: Template | None) -> None:
        self._template = template
        self._msg_type = template.type.value if template is not None else None

    @property
    def msg_type(self) -> str | None:
        return self._msg_type

    def serialize_core(self) -> dict[str, Any]:
        return compact({
            "is_offline": self.is_offline,
            "offline_expire_time": self.offline_expire_time,
            "push_network_type": int(self.push_network_type),
            "msgtype": self._msg_type,
        })

    def serialize_template(self) -> dict[str, Any] | None:
        if self._template is None:
            return None
        return serialize_template(self._template)

    def serialize_push_info(self) -> dict[str, Any] | None:
        if self.apns_info is None:
            return None
        return self.apns_info.to_dict()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(msg_type={self._msg_type!r})"


class SingleMessage(Message):
    """Pushed to one :class:`Target`."""


class ListMessage(Message):
    """Saved once and pushed to a :class:`TargetList`."""


@dataclass
class BatchTask:
    message: SingleMessage
    target: Target


class ConditionKey(str, Enum):
    PHONE_TYPE = "phonetype"
    REGION = "region"
    TAG = "tag"


class CondOptType(IntEnum):
    OR = 0
    AND = 1
    NOT_IN = 2


@dataclass(frozen=True)
class Condition:
    """Audience filter for app-wide pushes, e.g. ``tag in ("vip",)``.

    ``opt_type`` combines ``values``: union (OR), intersection (AND) or
    exclusion (NOT_IN).
    """

    key: ConditionKey
    values: list[str] = field(default_factory=list)
    opt_type: CondOptType = CondOptType.OR

    def to_dict(self) -> dict[str, Any]:
        return compact({
            "key": ConditionKey(self.key).value,
            "values": list(self.values),
            "opt_type": int(self.opt_type),
        })


class AppMessage(Message):
    """Broadcast to every user of the app matching all :attr:`conditions`."""

    def __init__(
        self,
        template: Template | None = None,
        apns_info: ApnsInfo | None = None,
        *,
        conditions: list[Condition] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(template, apns_info, **kwargs)
        self.conditions: list[Condition] = list(conditions or [])

    def serialize_conditions(self) -> list[dict[str, Any]]:
        return [c.to_dict() for c in self.conditions]


class TagMessage(Message):
    """Broadcast to the users carrying :attr:`tag`."""

    def __init__(
        self,
        template: Template | None = None,
        apns_info: ApnsInfo | None = None,
        *,
        tag: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(template, apns_info, **kwargs)
        self.tag = tag
