from .bridge import ALL_EVENTS, ChangeEvent, RealtimeBridge, RealtimeSubscription
from .refresh import CoalescingRefresher

__all__ = [
    "ALL_EVENTS",
    "ChangeEvent",
    "CoalescingRefresher",
    "RealtimeBridge",
    "RealtimeSubscription",
]
