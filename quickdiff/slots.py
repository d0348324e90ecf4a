"""Write-once result slots filled by concurrent candidates.

A candidate running on several workers settles each slot at most once. The
harness reads the slots only after the candidate has returned, which acts as
the join barrier, so :meth:`SlotArray.load_all` is a plain sequential pass.
"""

from __future__ import annotations

import threading
from typing import Generic, List, Optional, TypeVar

from .errors import SlotAlreadySettledError

T = TypeVar("T")


class WriteOnceCell(Generic[T]):
    __slots__ = ("_lock", "_value", "_settled")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._settled = False

    def try_settle(self, value: T) -> bool:
        """Store ``value`` if the cell is empty; return whether this call won."""

        with self._lock:
            if self._settled:
                return False
            self._value = value
            self._settled = True
            return True

    @property
    def settled(self) -> bool:
        return self._settled

    def load(self, default: T) -> T:
        return self._value if self._settled else default  # type: ignore[return-value]


class SlotArray(Generic[T]):
    """Fixed-size array of write-once cells with a default for unsettled slots."""

    def __init__(self, size: int, default: T) -> None:
        if size < 0:
            raise ValueError(f"SlotArray size must be non-negative, got {size}")
        self.default = default
        self._cells: List[WriteOnceCell[T]] = [WriteOnceCell() for _ in range(size)]

    def __len__(self) -> int:
        return len(self._cells)

    def try_settle(self, index: int, value: T) -> bool:
        return self._cells[index].try_settle(value)

    def settle(self, index: int, value: T) -> None:
        if not self._cells[index].try_settle(value):
            raise SlotAlreadySettledError(index)

    def is_settled(self, index: int) -> bool:
        return self._cells[index].settled

    def load(self, index: int) -> T:
        return self._cells[index].load(self.default)

    def load_all(self) -> List[T]:
        """Snapshot every slot; call only once the writers have finished."""

        return [cell.load(self.default) for cell in self._cells]


__all__ = ["SlotArray", "WriteOnceCell"]
