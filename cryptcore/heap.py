"""First-fit heap allocator over a simulated address range.

Every block carries a size header just before its data. Freed blocks go
on a free list and are merged with free neighbours on either side.
Addresses are plain integers counted from the start of the heap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

ALIGNMENT = 8
HEADER_SIZE = 8
MAX_FREE_CHUNKS = 16384


def _align(value: int, alignment: int = ALIGNMENT) -> int:
    return (value + alignment - 1) & ~(alignment - 1)


@dataclass
class HeapChunk:
    """A free region: the data address after its header, and its size."""

    base: int
    size: int

    @property
    def end(self) -> int:
        """First aligned address past the chunk's data."""
        return _align(self.base + self.size)


class HeapAllocator:
    """Allocates blocks from a heap of fixed capacity, reusing freed ones."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("heap capacity cannot be negative")
        self.capacity = capacity
        self._top = 0
        self._free: List[HeapChunk] = []
        self._sizes: Dict[int, int] = {}
        self._live: Set[int] = set()

    def _remove(self, chunk: HeapChunk) -> None:
        # The last chunk takes the removed one's place, as the free list is unordered.
        index = next(i for i, c in enumerate(self._free) if c is chunk)
        self._free[index] = self._free[-1]
        self._free.pop()

    def alloc(self, size: int) -> int:
        """Allocate size bytes and return the block's address."""
        if size < 0:
            raise ValueError("allocation size cannot be negative")
        chunk = next((c for c in self._free if c.size >= size), None)
        if chunk is None:
            address = self._top + HEADER_SIZE
            if address + size > self.capacity:
                raise MemoryError(
                    f"heap exhausted: {size} bytes requested, capacity {self.capacity}"
                )
            self._sizes[address] = size
            self._top = _align(address + size)
        else:
            address = chunk.base
            if chunk.size - size > HEADER_SIZE:
                end = chunk.end
                self._sizes[address] = size
                new_base = _align(address + size + HEADER_SIZE)
                chunk.base = new_base
                chunk.size = end - new_base
                self._sizes[new_base] = chunk.size
            else:
                # The whole chunk is handed out; its header keeps the chunk size.
                self._remove(chunk)
        self._live.add(address)
        return address

    def free(self, address: int) -> None:
        """Return a block to the heap, merging it with free neighbours."""
        if address not in self._live:
            raise ValueError(f"address {address} is not an allocated block")
        size = self._sizes[address]
        mem_min = address - HEADER_SIZE
        mem_max = _align(address + size)

        before: Optional[HeapChunk] = None
        after: Optional[HeapChunk] = None
        for chunk in self._free:
            if chunk.base - HEADER_SIZE == mem_max:
                after = chunk
            elif chunk.end == mem_min:
                before = chunk
            if before is not None and after is not None:
                break

        if before is None and after is None and len(self._free) >= MAX_FREE_CHUNKS:
            raise MemoryError("too many free chunks")

        self._live.discard(address)
        if before is not None and after is not None:
            end = after.end
            before.size = end - before.base
            self._sizes[before.base] = before.size
            self._remove(after)
            del self._sizes[after.base]
            del self._sizes[address]
        elif after is not None:
            end = after.end
            del self._sizes[after.base]
            after.base = address
            after.size = end - address
            self._sizes[address] = after.size
        elif before is not None:
            before.size = mem_max - before.base
            self._sizes[before.base] = before.size
            del self._sizes[address]
        else:
            self._free.append(HeapChunk(address, size))

    def size_of(self, address: int) -> int:
        """Size recorded in the header of an allocated block."""
        if address not in self._live:
            raise ValueError(f"address {address} is not an allocated block")
        return self._sizes[address]

    def free_chunks(self) -> Tuple[HeapChunk, ...]:
        """Copies of the free chunks, in free-list order."""
        return tuple(HeapChunk(c.base, c.size) for c in self._free)

    def top(self) -> int:
        """The address past the highest block ever handed out."""
        return self._top