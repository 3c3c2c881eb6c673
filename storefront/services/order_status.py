"""Order status transition helpers."""

from __future__ import annotations

ORDER_STATUSES: list[str] = ["pending", "confirmed", "preparing", "out_for_delivery", "delivered", "cancelled"]

# "confirmed" is only kept so older records can still move forward.
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"preparing", "cancelled"},
    "confirmed": {"preparing", "cancelled"},
    "preparing": {"out_for_delivery", "cancelled"},
    "out_for_delivery": {"delivered"},
    "delivered": set(),
    "cancelled": set(),
}


class InvalidStatusTransitionError(Exception):
    """Raised when an order cannot move from its current status to the requested one."""

    def __init__(self, current: str, new: str) -> None:
        super().__init__(f"Cannot change order status from {current} to {new}")
        self.current = current
        self.new = new


def can_transition(current: str, new: str) -> bool:
    """Return whether order can move from current to new status."""
    return new in ALLOWED_TRANSITIONS.get(current, set())


def next_statuses(current: str) -> list[str]:
    """Statuses reachable from current, in lifecycle order."""
    allowed = ALLOWED_TRANSITIONS.get(current, set())
    return [status for status in ORDER_STATUSES if status in allowed]
