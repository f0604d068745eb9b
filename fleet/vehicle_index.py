"""
VehicleIndex - unbalanced binary search tree of vehicles keyed by mileage.

Smaller mileage goes left; equal or larger goes right, so vehicles sharing a
mileage end up in insertion order down the right spine. Registration lookup
cannot use the tree ordering and walks every node.
"""

import logging
from typing import List, Optional

from .vehicle import Vehicle

logger = logging.getLogger(__name__)


class _Node:
    __slots__ = ("vehicle", "left", "right")

    def __init__(self, vehicle: Vehicle):
        self.vehicle = vehicle
        self.left: Optional["_Node"] = None
        self.right: Optional["_Node"] = None


class VehicleIndex:
    """Mileage-ordered vehicle tree with secondary lookup by registration."""

    def __init__(self):
        self._root: Optional[_Node] = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._root is None

    def insert(self, vehicle: Vehicle) -> None:
        """
        Add a vehicle as a new leaf. No rebalancing.

        Callers are responsible for registration uniqueness
        (see `FleetState.add_vehicle`).
        """
        node = _Node(vehicle)
        self._size += 1
        if self._root is None:
            self._root = node
            return
        current = self._root
        while True:
            if vehicle.mileage < current.vehicle.mileage:
                if current.left is None:
                    current.left = node
                    break
                current = current.left
            else:
                if current.right is None:
                    current.right = node
                    break
                current = current.right
        logger.debug("Indexed %s at %d", vehicle.registration, vehicle.mileage)

    def search_by_mileage(self, mileage: int) -> Optional[Vehicle]:
        """First vehicle found with exactly this mileage, by tree descent."""
        current = self._root
        while current is not None:
            if mileage == current.vehicle.mileage:
                return current.vehicle
            if mileage < current.vehicle.mileage:
                current = current.left
            else:
                current = current.right
        return None

    def search_by_registration(self, registration: str) -> Optional[Vehicle]:
        """Exact registration match via full in-order walk. O(n)."""
        for vehicle in self._in_order():
            if vehicle.registration == registration:
                return vehicle
        return None

    def remove(self, registration: str) -> bool:
        """
        Remove the vehicle with this registration.

        The target's mileage is resolved first, then the tree is descended by
        mileage. Returns False if no such vehicle exists.
        """
        target = self.search_by_registration(registration)
        if target is None:
            return False
        if not self._remove(target.mileage, registration):
            return False
        self._size -= 1
        logger.debug("Removed %s from index", registration)
        return True

    def _remove(self, mileage: int, registration: str) -> bool:
        # Frames are (parent, side, node); side is the parent attribute holding node
        stack = [(None, None, self._root)]
        while stack:
            parent, side, node = stack.pop()
            if node is None:
                continue
            if mileage < node.vehicle.mileage:
                stack.append((node, "left", node.left))
            elif mileage > node.vehicle.mileage:
                stack.append((node, "right", node.right))
            elif node.vehicle.registration != registration:
                # Same mileage, different vehicle: the target may be on either side
                stack.append((node, "right", node.right))
                stack.append((node, "left", node.left))
            else:
                self._unlink(parent, side, node)
                return True
        return False

    def _unlink(self, parent: Optional[_Node], side: Optional[str], node: _Node) -> None:
        if node.left is None:
            replacement = node.right
        elif node.right is None:
            replacement = node.left
        else:
            # Two children: pull up the in-order successor, which has no left child
            successor_parent = node
            successor = node.right
            while successor.left is not None:
                successor_parent = successor
                successor = successor.left
            node.vehicle = successor.vehicle
            if successor_parent is node:
                node.right = successor.right
            else:
                successor_parent.left = successor.right
            return
        if parent is None:
            self._root = replacement
        else:
            setattr(parent, side, replacement)

    def update_mileage(self, registration: str, new_mileage: int) -> bool:
        """
        Change a vehicle's mileage and re-key it in the tree.

        Mileage is the ordering key, so the vehicle is removed and re-inserted
        rather than edited in place.
        """
        if new_mileage < 0:
            raise ValueError(f"Mileage cannot be negative, got {new_mileage}")
        vehicle = self.search_by_registration(registration)
        if vehicle is None:
            return False
        self.remove(registration)
        vehicle.mileage = int(new_mileage)
        self.insert(vehicle)
        return True

    def get_all_vehicles(self) -> List[Vehicle]:
        """Snapshot of every vehicle in ascending mileage order."""
        return list(self._in_order())

    def _in_order(self):
        # Explicit stack so degenerate (list-shaped) trees don't hit the recursion limit
        stack = []
        current = self._root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            current = stack.pop()
            yield current.vehicle
            current = current.right
