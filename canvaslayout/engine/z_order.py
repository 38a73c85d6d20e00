"""
z_order.py — Draw/interaction order for components and artboards.

StackOrder keeps ids bottom → top. Rendering iterates it forward; hit-testing
walks it top-down and returns the first rect containing the point. Every
reorder keeps the id set intact: each id appears exactly once.
"""

import logging
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Mapping, Optional

from ..schema import Point, Rect
from .geometry import contains_point

logger = logging.getLogger(__name__)


class ZOrderCommand(Enum):
    """Reorder operations exposed to the host."""
    BRING_TO_FRONT = "bringToFront"
    BRING_FORWARD = "bringForward"
    SEND_BACKWARD = "sendBackward"
    SEND_TO_BACK = "sendToBack"


def command_for_shortcut(key: str, command_key: bool, shift: bool) -> Optional[ZOrderCommand]:
    """
    Map a keyboard shortcut to a reorder command.

    Ctrl/Cmd+] brings forward, Ctrl/Cmd+[ sends backward; adding Shift goes
    all the way to the front/back.
    """
    if not command_key:
        return None
    if key == "]":
        return ZOrderCommand.BRING_TO_FRONT if shift else ZOrderCommand.BRING_FORWARD
    if key == "[":
        return ZOrderCommand.SEND_TO_BACK if shift else ZOrderCommand.SEND_BACKWARD
    return None


class StackOrder:
    """Ordered id list, bottom → top."""

    def __init__(self, ids: Iterable[str] = ()):
        self._ids: List[str] = []
        for item_id in ids:
            self.add(item_id)

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    def add(self, item_id: str) -> bool:
        """Append a new id on top. Existing ids are left where they are."""
        if item_id in self._ids:
            return False
        self._ids.append(item_id)
        return True

    def remove(self, item_id: str) -> bool:
        """Drop an id; the others keep their relative order."""
        if item_id not in self._ids:
            return False
        self._ids.remove(item_id)
        return True

    def sync(self, ids: Iterable[str]) -> None:
        """Preserve order of surviving ids, drop missing ones, append new ones."""
        current = list(ids)
        wanted = set(current)
        self._ids = [i for i in self._ids if i in wanted]
        for item_id in current:
            self.add(item_id)

    # -------------------------------------------------------------------------
    # Reordering
    # -------------------------------------------------------------------------

    def bring_to_front(self, item_id: str) -> bool:
        if item_id not in self._ids:
            return self._unknown(item_id)
        if self._ids[-1] == item_id:
            return False
        self._ids.remove(item_id)
        self._ids.append(item_id)
        return True

    def send_to_back(self, item_id: str) -> bool:
        if item_id not in self._ids:
            return self._unknown(item_id)
        if self._ids[0] == item_id:
            return False
        self._ids.remove(item_id)
        self._ids.insert(0, item_id)
        return True

    def bring_forward(self, item_id: str) -> bool:
        """Swap with the id directly above."""
        return self._swap(item_id, 1)

    def send_backward(self, item_id: str) -> bool:
        """Swap with the id directly below."""
        return self._swap(item_id, -1)

    def apply(self, command: ZOrderCommand, item_id: str) -> bool:
        handlers: Mapping[ZOrderCommand, Callable[[str], bool]] = {
            ZOrderCommand.BRING_TO_FRONT: self.bring_to_front,
            ZOrderCommand.BRING_FORWARD: self.bring_forward,
            ZOrderCommand.SEND_BACKWARD: self.send_backward,
            ZOrderCommand.SEND_TO_BACK: self.send_to_back,
        }
        return handlers[command](item_id)

    def _swap(self, item_id: str, direction: int) -> bool:
        if item_id not in self._ids:
            return self._unknown(item_id)
        index = self._ids.index(item_id)
        target = index + direction
        if target < 0 or target >= len(self._ids):
            return False
        self._ids[index], self._ids[target] = self._ids[target], self._ids[index]
        return True

    def _unknown(self, item_id: str) -> bool:
        logger.debug(f"Ignoring reorder of unknown id {item_id}")
        return False

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def index_of(self, item_id: str) -> Optional[int]:
        """Stack index (0 = bottom), or None if absent."""
        try:
            return self._ids.index(item_id)
        except ValueError:
            return None

    def ids(self) -> List[str]:
        """Bottom → top copy of the order."""
        return list(self._ids)

    def hit_test(self, point: Point, rects: Mapping[str, Rect]) -> Optional[str]:
        """Topmost id whose rect contains the point; ids without a rect are skipped."""
        for item_id in reversed(self._ids):
            rect = rects.get(item_id)
            if rect is not None and contains_point(rect, point):
                return item_id
        return None

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._ids

    def __repr__(self) -> str:
        return f"StackOrder({self._ids!r})"
