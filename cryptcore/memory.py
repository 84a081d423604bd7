"""Tagged memory: three resettable arenas, a heap and bulk mappings.

- Permanent arena: allocations that live as long as the game or level.
- Simulation arena: allocations that live for one update step.
- Render arena: allocations that live for one rendered frame.
"""

from __future__ import annotations

import enum
from typing import Dict, List, Optional, Union

from .heap import HeapAllocator


def kilobytes(n: int) -> int:
    return 1024 * n


def megabytes(n: int) -> int:
    return 1024 * kilobytes(n)


def gigabytes(n: int) -> int:
    return 1024 * megabytes(n)


MAX_MAPPING_COUNT = 1024
DEFAULT_ARENA_CAPACITY = megabytes(64)
DEFAULT_HEAP_CAPACITY = gigabytes(4)


class MemoryTag(enum.IntEnum):
    """Which allocator, and so which lifetime, a request belongs to."""

    PERMANENT = 0
    SIM = 1
    TEMP = 1
    RENDER = 2
    BULK_DATA = 3
    HEAP = 4
    UNKNOWN = 5


_TAG_LABELS = {
    MemoryTag.PERMANENT: "MEMORY_TAG_PERMANENT",
    MemoryTag.SIM: "MEMORY_TAG_SIM",
    MemoryTag.RENDER: "MEMORY_TAG_RENDER",
    MemoryTag.BULK_DATA: "MEM_TAG_BULK_DATA",
    MemoryTag.HEAP: "MEM_TAG_HEAP",
}

_ARENA_TAGS = (MemoryTag.PERMANENT, MemoryTag.SIM, MemoryTag.RENDER)


class OutOfMemoryError(MemoryError):
    """An allocator could not satisfy a request."""


class MemoryArena:
    """A bump allocator over a fixed buffer, freed all at once by reset."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("arena capacity cannot be negative")
        self.capacity = capacity
        self.used = 0
        self._buffer = bytearray(capacity)

    def push(self, size: int) -> int:
        """Reserve size bytes and return their offset in the arena."""
        if size < 0:
            raise ValueError("allocation size cannot be negative")
        if self.used + size > self.capacity:
            raise OutOfMemoryError(
                f"arena full: {size} bytes requested, {self.capacity - self.used} left"
            )
        offset = self.used
        self.used += size
        return offset

    def reset(self) -> None:
        """Forget every allocation made so far."""
        self.used = 0

    def view(self, offset: int, size: int) -> memoryview:
        """A writable view of size bytes starting at offset."""
        if offset < 0 or size < 0 or offset + size > self.capacity:
            raise ValueError("view lies outside the arena")
        return memoryview(self._buffer)[offset : offset + size]


Allocation = Union[memoryview, int]


class MemorySystem:
    """Routes allocations to the allocator chosen by their tag."""

    def __init__(
        self,
        arena_capacity: int = DEFAULT_ARENA_CAPACITY,
        heap_capacity: int = DEFAULT_HEAP_CAPACITY,
    ) -> None:
        self._arenas: Dict[MemoryTag, MemoryArena] = {
            tag: MemoryArena(arena_capacity) for tag in _ARENA_TAGS
        }
        self._heap: Optional[HeapAllocator] = HeapAllocator(heap_capacity)
        # The arenas and the heap each take one mapping.
        self._reserved_mappings = len(self._arenas) + 1
        self._bulk: List[bytearray] = []
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("memory system is closed")

    def alloc(self, size: int, tag: MemoryTag) -> Allocation:
        """Allocate zeroed memory.

        Arena and bulk allocations come back as writable views; heap
        allocations come back as an address to hand to dealloc.
        """
        self._check_open()
        if size < 0:
            raise ValueError("allocation size cannot be negative")
        if tag == MemoryTag.BULK_DATA:
            if self._reserved_mappings + len(self._bulk) >= MAX_MAPPING_COUNT:
                raise OutOfMemoryError("too many bulk mappings")
            block = bytearray(size)
            self._bulk.append(block)
            return memoryview(block)
        if tag == MemoryTag.HEAP:
            assert self._heap is not None
            try:
                return self._heap.alloc(size)
            except MemoryError as exc:
                raise OutOfMemoryError(str(exc)) from exc
        if tag in self._arenas:
            arena = self._arenas[MemoryTag(tag)]
            view = arena.view(arena.push(size), size)
            view[:] = bytes(size)
            return view
        raise ValueError(f"unknown allocation type: {tag!r}")

    def dealloc(self, address: int) -> None:
        """Free a heap allocation."""
        self._check_open()
        assert self._heap is not None
        self._heap.free(address)

    def begin(self, tag: MemoryTag) -> None:
        """Reset the arena for tag."""
        self._check_open()
        self.arena(tag).reset()

    def arena(self, tag: MemoryTag) -> MemoryArena:
        """The arena behind an arena tag."""
        try:
            return self._arenas[MemoryTag(tag)]
        except (KeyError, ValueError):
            label = _TAG_LABELS.get(tag, "NULL") if isinstance(tag, MemoryTag) else "NULL"
            raise ValueError(f"no arena for memory of type: {label}") from None

    def close(self) -> None:
        """Release every allocator; the system cannot be used afterwards."""
        self._arenas.clear()
        self._bulk.clear()
        self._heap = None
        self._closed = True

    def __enter__(self) -> "MemorySystem":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()