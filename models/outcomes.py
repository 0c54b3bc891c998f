from pydantic import Field, computed_field
from typing import List, Optional

from .base import BaseGolfModel


class ItemOutcome(BaseGolfModel):
    """Result of one side effect inside a batch (one notification, one push, one post)."""
    target: str
    success: bool
    error: Optional[str] = None


class BatchResult(BaseGolfModel):
    """One outcome per item. Failures are recorded here instead of raised."""
    outcomes: List[ItemOutcome] = Field(default_factory=list)

    @computed_field
    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @computed_field
    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)

    def record(self, target: str, error: Optional[BaseException] = None) -> ItemOutcome:
        outcome = ItemOutcome(
            target=target,
            success=error is None,
            error=f"{type(error).__name__}: {error}" if error is not None else None,
        )
        self.outcomes = self.outcomes + [outcome]
        return outcome
