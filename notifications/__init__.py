from .fanout import FanoutEvent, FanoutResult, NotificationFanout
from .push import (
    PushDeliveryError,
    PushGateway,
    PushResult,
    PushTransport,
    WebPushTransport,
    build_payload,
)

__all__ = [
    "FanoutEvent",
    "FanoutResult",
    "NotificationFanout",
    "PushDeliveryError",
    "PushGateway",
    "PushResult",
    "PushTransport",
    "WebPushTransport",
    "build_payload",
]
