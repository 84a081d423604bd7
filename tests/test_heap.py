import pytest

from cryptcore.heap import ALIGNMENT, HEADER_SIZE, HeapAllocator, HeapChunk


@pytest.fixture
def heap():
    return HeapAllocator(1 << 20)


def test_first_block_follows_its_header(heap):
    assert heap.alloc(10) == HEADER_SIZE


def test_addresses_aligned_and_disjoint(heap):
    sizes = [1, 3, 13, 8, 0, 27]
    addresses = [heap.alloc(size) for size in sizes]
    assert all(a % ALIGNMENT == 0 for a in addresses)
    for (a, size), b in zip(zip(addresses, sizes), addresses[1:]):
        assert b >= a + size + HEADER_SIZE
    assert heap.top() % ALIGNMENT == 0
    assert heap.top() >= addresses[-1] + sizes[-1]


def test_size_of_reports_requested_size(heap):
    address = heap.alloc(40)
    assert heap.size_of(address) == 40


def test_freed_block_is_reused(heap):
    a = heap.alloc(32)
    heap.alloc(8)
    heap.free(a)
    assert heap.free_chunks() == (HeapChunk(a, 32),)
    assert heap.alloc(32) == a
    assert heap.free_chunks() == ()


def test_small_leftover_is_not_split(heap):
    a = heap.alloc(16)
    heap.alloc(8)
    heap.free(a)
    assert heap.alloc(12) == a
    assert heap.free_chunks() == ()
    assert heap.size_of(a) == 16


def test_large_chunk_is_split(heap):
    a = heap.alloc(64)
    guard = heap.alloc(8)
    heap.free(a)
    assert heap.alloc(8) == a
    assert heap.size_of(a) == 8
    (chunk,) = heap.free_chunks()
    assert chunk.base > a
    assert chunk.base % ALIGNMENT == 0
    assert chunk.base + chunk.size == guard - HEADER_SIZE


def test_merges_with_following_chunk(heap):
    a = heap.alloc(24)
    b = heap.alloc(24)
    guard = heap.alloc(8)
    heap.free(b)
    heap.free(a)
    (chunk,) = heap.free_chunks()
    assert chunk.base == a
    assert chunk.base + chunk.size == guard - HEADER_SIZE


def test_merges_with_preceding_chunk(heap):
    a = heap.alloc(24)
    b = heap.alloc(24)
    guard = heap.alloc(8)
    heap.free(a)
    heap.free(b)
    (chunk,) = heap.free_chunks()
    assert chunk.base == a
    assert chunk.base + chunk.size == guard - HEADER_SIZE


def test_merges_on_both_sides(heap):
    a = heap.alloc(16)
    b = heap.alloc(40)
    c = heap.alloc(16)
    guard = heap.alloc(8)
    heap.free(a)
    heap.free(c)
    assert len(heap.free_chunks()) == 2
    heap.free(b)
    (chunk,) = heap.free_chunks()
    assert chunk.base == a
    assert chunk.base + chunk.size == guard - HEADER_SIZE


def test_freeing_everything_leaves_one_chunk(heap):
    blocks = [heap.alloc(size) for size in (5, 17, 9, 30)]
    for address in blocks:
        heap.free(address)
    (chunk,) = heap.free_chunks()
    assert chunk.base == blocks[0]
    assert chunk.base + chunk.size == heap.top()


def test_first_fit_picks_earliest_large_enough_chunk(heap):
    small = heap.alloc(8)
    heap.alloc(8)
    big = heap.alloc(48)
    heap.alloc(8)
    heap.free(small)
    heap.free(big)
    assert heap.alloc(48) == big


def test_free_unknown_address(heap):
    with pytest.raises(ValueError):
        heap.free(1234)


def test_double_free(heap):
    a = heap.alloc(8)
    heap.alloc(8)
    heap.free(a)
    with pytest.raises(ValueError):
        heap.free(a)


def test_size_of_freed_block(heap):
    a = heap.alloc(8)
    heap.free(a)
    with pytest.raises(ValueError):
        heap.size_of(a)


def test_negative_size(heap):
    with pytest.raises(ValueError):
        heap.alloc(-1)


def test_capacity_exhausted():
    small = HeapAllocator(64)
    with pytest.raises(MemoryError):
        small.alloc(100)


def test_exhausted_heap_still_reuses_free_blocks():
    small = HeapAllocator(64)
    a = small.alloc(24)
    small.alloc(16)
    with pytest.raises(MemoryError):
        small.alloc(24)
    small.free(a)
    assert small.alloc(24) == a