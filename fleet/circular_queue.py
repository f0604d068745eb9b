"""Fixed-capacity circular FIFO queues for drivers and deliveries."""

import logging
from typing import Callable, Generic, List, Optional, TypeVar

from .delivery import Delivery
from .driver import Driver

logger = logging.getLogger(__name__)

QUEUE_CAPACITY = 100

T = TypeVar("T")


class CircularQueue(Generic[T]):
    """
    Ring buffer with a hard capacity.

    The live elements are the `count` slots starting at `front`, wrapping
    modulo capacity. Slots outside that window are stale and never read.
    """

    def __init__(self, capacity: int = QUEUE_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"Queue capacity must be positive, got {capacity}")
        self._items: List[Optional[T]] = [None] * capacity
        self._capacity = capacity
        self._front = 0
        self._rear = -1
        self._count = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._count

    def is_empty(self) -> bool:
        return self._count == 0

    def is_full(self) -> bool:
        return self._count == self._capacity

    def enqueue(self, item: T) -> bool:
        """Add to the rear. Returns False (item not stored) when full."""
        if self.is_full():
            logger.warning(
                "%s is full (%d items), rejected %r",
                type(self).__name__, self._capacity, item,
            )
            return False
        self._rear = (self._rear + 1) % self._capacity
        self._items[self._rear] = item
        self._count += 1
        return True

    def dequeue(self) -> Optional[T]:
        """Remove and return the front item, or None when empty."""
        if self._count == 0:
            return None
        item = self._items[self._front]
        self._front = (self._front + 1) % self._capacity
        self._count -= 1
        return item

    def peek_all(self) -> List[T]:
        """Items front-to-rear without removing them."""
        return [
            self._items[(self._front + i) % self._capacity]
            for i in range(self._count)
        ]

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        """First live item (front-to-rear) matching `predicate`."""
        for item in self.peek_all():
            if predicate(item):
                return item
        return None

    def clear(self) -> None:
        # Backing slots are left as-is; count gates visibility
        self._front = 0
        self._rear = -1
        self._count = 0


class DriverQueue(CircularQueue[Driver]):
    """Drivers waiting to be assigned, in arrival order."""

    def find_driver(self, driver_id: str) -> Optional[Driver]:
        return self.find(lambda d: d.driver_id == driver_id)

    def driver_exists(self, driver_id: str) -> bool:
        return self.find_driver(driver_id) is not None


class DeliveryQueue(CircularQueue[Delivery]):
    """Pending deliveries, processed first-in first-out."""

    def find_delivery(self, package_id: str) -> Optional[Delivery]:
        return self.find(lambda d: d.package_id == package_id)

    def delivery_exists(self, package_id: str) -> bool:
        return self.find_delivery(package_id) is not None
