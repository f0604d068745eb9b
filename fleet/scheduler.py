"""MaintenanceScheduler - array-backed binary min-heap of maintenance tasks."""

import logging
from typing import List, Optional

from .algorithms import merge_sort
from .maintenance_task import MaintenanceTask

logger = logging.getLogger(__name__)

SCHEDULER_CAPACITY = 100


def _miles(task: MaintenanceTask) -> int:
    return task.miles_until_service


class MaintenanceScheduler:
    """
    Priority queue of maintenance tasks, fewest miles-until-service first.

    heap[0] is always the most urgent task. For index i the parent is
    (i - 1) // 2 and the children are 2i + 1 and 2i + 2.
    """

    def __init__(self, capacity: int = SCHEDULER_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"Scheduler capacity must be positive, got {capacity}")
        self._heap: List[Optional[MaintenanceTask]] = [None] * capacity
        self._capacity = capacity
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def add_task(self, task: MaintenanceTask) -> bool:
        """Schedule a task. Returns False (task not stored) when full."""
        if self._size >= self._capacity:
            logger.warning(
                "Maintenance scheduler is full (%d tasks), rejected %s",
                self._capacity, task.registration,
            )
            return False
        self._heap[self._size] = task
        self._sift_up(self._size)
        self._size += 1
        logger.debug(
            "Scheduled maintenance for %s in %d miles",
            task.registration, task.miles_until_service,
        )
        return True

    def process_next_task(self) -> Optional[MaintenanceTask]:
        """Remove and return the most urgent task, or None when empty."""
        if self._size == 0:
            return None
        task = self._heap[0]
        self._heap[0] = self._heap[self._size - 1]
        self._size -= 1
        if self._size > 0:
            self._sift_down(0)
        return task

    def show_all_tasks(self) -> List[MaintenanceTask]:
        """
        All pending tasks in priority order.

        The heap is only partially ordered, so this sorts a copy.
        """
        return merge_sort(self.get_all_tasks(), key=_miles).items

    def get_all_tasks(self) -> List[MaintenanceTask]:
        """Pending tasks in heap-array order (not sorted)."""
        return self._heap[:self._size]

    def find_task(self, registration: str, miles_until_service: int) -> Optional[MaintenanceTask]:
        for task in self.get_all_tasks():
            if (task.registration == registration
                    and task.miles_until_service == miles_until_service):
                return task
        return None

    def task_exists(self, registration: str, miles_until_service: int) -> bool:
        return self.find_task(registration, miles_until_service) is not None

    def update_tasks_for_vehicle(self, registration: str, delta: int) -> int:
        """
        Pull every task for a vehicle `delta` miles closer, floored at zero.

        Several positions may now violate heap order, so the whole heap is
        rebuilt. Returns the number of tasks updated.
        """
        updated = 0
        for task in self.get_all_tasks():
            if task.registration == registration:
                task.miles_until_service = max(0, task.miles_until_service - delta)
                updated += 1
        if updated:
            self._heapify()
            logger.debug("Updated %d maintenance tasks for %s", updated, registration)
        return updated

    def clear(self) -> None:
        self._size = 0

    def _heapify(self) -> None:
        for index in range(self._size // 2 - 1, -1, -1):
            self._sift_down(index)

    def _sift_up(self, index: int) -> None:
        heap = self._heap
        while index > 0:
            parent = (index - 1) // 2
            if heap[index].miles_until_service >= heap[parent].miles_until_service:
                break
            heap[index], heap[parent] = heap[parent], heap[index]
            index = parent

    def _sift_down(self, index: int) -> None:
        heap = self._heap
        while True:
            left = 2 * index + 1
            right = 2 * index + 2
            smallest = index
            if (left < self._size
                    and heap[left].miles_until_service < heap[smallest].miles_until_service):
                smallest = left
            if (right < self._size
                    and heap[right].miles_until_service < heap[smallest].miles_until_service):
                smallest = right
            if smallest == index:
                return
            heap[index], heap[smallest] = heap[smallest], heap[index]
            index = smallest
