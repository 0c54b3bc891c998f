from datetime import datetime
from pydantic import Field, model_validator
from typing import Any, Dict, Optional

from .base import BaseGolfModel


class PushSubscription(BaseGolfModel):
    """A device registered for web-push. `endpoint` uniquely identifies the device."""
    id: Optional[str] = None
    user_id: Optional[str] = None
    tournament_id: Optional[str] = None
    endpoint: str = Field(..., min_length=1)
    subscription: Dict[str, Any] = Field(default_factory=dict)
    updated_at: Optional[datetime] = None

    @model_validator(mode='after')
    def validate_endpoint_matches_payload(self):
        payload_endpoint = self.subscription.get("endpoint")
        if payload_endpoint is not None and payload_endpoint != self.endpoint:
            raise ValueError("Subscription payload endpoint does not match endpoint")
        return self

    @classmethod
    def from_browser(
        cls,
        subscription: Dict[str, Any],
        user_id: Optional[str] = None,
        tournament_id: Optional[str] = None,
    ) -> "PushSubscription":
        """Build from the JSON a browser PushManager returns ({endpoint, keys: {...}})."""
        return cls(
            user_id=user_id,
            tournament_id=tournament_id,
            endpoint=subscription.get("endpoint") or "",
            subscription=subscription,
        )
