import heapq
from dataclasses import dataclass, field
from typing import Callable, List


@dataclass(order=True)
class ScheduledAction:
    at_ms: float
    order: int
    ghost_name: str = field(compare=False)
    action: Callable[[], None] = field(compare=False)


class TickScheduler:
    """Delayed callbacks on the round clock (re-release after capture etc.)."""

    def __init__(self) -> None:
        self.queue: List[ScheduledAction] = []
        self._order = 0
        self.now_ms = 0.0

    def schedule(self, delay_ms: float, ghost_name: str, action: Callable[[], None]) -> None:
        self._order += 1
        heapq.heappush(self.queue, ScheduledAction(self.now_ms + delay_ms, self._order, ghost_name, action))

    def advance(self, dt_ms: float) -> int:
        """Move the clock forward and run everything that came due. Returns the count run."""
        self.now_ms += dt_ms
        ran = 0
        while self.queue and self.queue[0].at_ms <= self.now_ms:
            item = heapq.heappop(self.queue)
            item.action()
            ran += 1
        return ran

    def cancel(self, ghost_name: str) -> None:
        self.queue = [item for item in self.queue if item.ghost_name != ghost_name]
        heapq.heapify(self.queue)

    def pending(self, ghost_name: str) -> bool:
        return any(item.ghost_name == ghost_name for item in self.queue)

    def clear(self) -> None:
        self.queue.clear()

    def __len__(self) -> int:
        return len(self.queue)
