"""Push – message composition and the Getui REST client."""
from getui_rest.push.apns import Alert, ApnsInfo, Multimedia, MultimediaType
from getui_rest.push.client import TOKEN_REFRESH_INTERVAL, TOKEN_REFRESH_RETRY_INTERVAL, GetuiClient
from getui_rest.push.message import (
    AppMessage,
    BatchTask,
    CondOptType,
    Condition,
    ConditionKey,
    ListMessage,
    Message,
    NetworkType,
    SingleMessage,
    TagMessage,
    Target,
    TargetList,
)
from getui_rest.push.style import (
    BaseStyle,
    ExpandStyle,
    GetuiStyle,
    ImageStyle,
    Style,
    StyleType,
    SystemStyle,
)
from getui_rest.push.template import (
    BaseTemplate,
    LinkTemplate,
    NotificationTemplate,
    NotyPopLoadTemplate,
    Template,
    TemplateType,
    TransmissionTemplate,
)

__all__ = [
    "TOKEN_REFRESH_INTERVAL",
    "TOKEN_REFRESH_RETRY_INTERVAL",
    "Alert",
    "ApnsInfo",
    "AppMessage",
    "BaseStyle",
    "BaseTemplate",
    "BatchTask",
    "CondOptType",
    "Condition",
    "ConditionKey",
    "ExpandStyle",
    "GetuiClient",
    "GetuiStyle",
    "ImageStyle",
    "LinkTemplate",
    "ListMessage",
    "Message",
    "Multimedia",
    "MultimediaType",
    "NetworkType",
    "NotificationTemplate",
    "NotyPopLoadTemplate",
    "SingleMessage",
    "Style",
    "StyleType",
    "SystemStyle",
    "TagMessage",
    "Target",
    "TargetList",
    "Template",
    "TemplateType",
    "TransmissionTemplate",
]
