"""Command buffer occupancy with deferred release events."""

from dataclasses import dataclass, field

from framesim.models.frame import ReleaseEvent


@dataclass
class CommandBuffer:
    """Bounded buffer between the CPU render thread and the GPU.

    Commands are enqueued when the render thread finishes a frame and
    leave the buffer when the GPU *starts* consuming them. Releases are
    recorded as events and applied lazily by :meth:`settle`.
    """

    capacity: int
    occupancy: int = 0
    _releases: list[ReleaseEvent] = field(default_factory=list)

    @property
    def pending(self) -> tuple[ReleaseEvent, ...]:
        return tuple(self._releases)

    def settle(self, time: float) -> None:
        """Apply every release due at or before ``time``."""
        due = [r for r in self._releases if r.time <= time]
        if not due:
            return
        self._releases = [r for r in self._releases if r.time > time]
        for release in due:
            self.occupancy = max(0, self.occupancy - release.amount)

    def would_overflow(self, amount: int) -> bool:
        return self.occupancy + amount > self.capacity

    def next_release_time(self) -> float | None:
        """Earliest pending release, or None if nothing is pending."""
        if not self._releases:
            return None
        return min(r.time for r in self._releases)

    def enqueue(self, amount: int) -> int:
        """Add commands and return the resulting occupancy."""
        self.occupancy += amount
        return self.occupancy

    def schedule_release(self, time: float, amount: int) -> None:
        self._releases.append(ReleaseEvent(time=time, amount=amount))
