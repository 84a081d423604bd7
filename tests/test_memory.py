import pytest

from cryptcore.memory import (
    MAX_MAPPING_COUNT,
    MemoryArena,
    MemorySystem,
    MemoryTag,
    OutOfMemoryError,
    gigabytes,
    kilobytes,
    megabytes,
)


@pytest.fixture
def system():
    with MemorySystem(arena_capacity=kilobytes(4), heap_capacity=kilobytes(64)) as mem:
        yield mem


def test_size_helpers():
    assert kilobytes(1) == 1024
    assert megabytes(1) == kilobytes(1024)
    assert gigabytes(2) == megabytes(2048)


def test_temp_is_an_alias_of_sim(system):
    assert MemoryTag(1) is MemoryTag.TEMP
    assert system.arena(MemoryTag.TEMP) is system.arena(MemoryTag.SIM)
    system.alloc(24, MemoryTag.TEMP)
    assert system.arena(MemoryTag.SIM).used == 24


def test_out_of_memory_is_a_memory_error():
    arena = MemoryArena(4)
    with pytest.raises(MemoryError):
        arena.push(5)


def test_arena_push_is_sequential():
    arena = MemoryArena(100)
    first = arena.push(10)
    second = arena.push(20)
    assert first == 0
    assert second == first + 10
    assert arena.used == 30


def test_arena_fills_exactly():
    arena = MemoryArena(32)
    arena.push(32)
    with pytest.raises(OutOfMemoryError):
        arena.push(1)


def test_arena_reset():
    arena = MemoryArena(32)
    arena.push(20)
    arena.reset()
    assert arena.used == 0
    assert arena.push(32) == 0


def test_arena_view_is_writable():
    arena = MemoryArena(16)
    offset = arena.push(4)
    arena.view(offset, 4)[:] = b"abcd"
    assert bytes(arena.view(0, 4)) == b"abcd"


def test_arena_view_out_of_range():
    arena = MemoryArena(16)
    with pytest.raises(ValueError):
        arena.view(10, 10)


def test_arena_negative_push():
    with pytest.raises(ValueError):
        MemoryArena(16).push(-1)


@pytest.mark.parametrize("tag", [MemoryTag.PERMANENT, MemoryTag.SIM, MemoryTag.RENDER])
def test_arena_alloc_tracks_usage(system, tag):
    block = system.alloc(100, tag)
    assert len(block) == 100
    assert system.arena(tag).used == 100


def test_alloc_is_zeroed_after_reset(system):
    block = system.alloc(8, MemoryTag.SIM)
    block[:] = b"\xff" * 8
    system.begin(MemoryTag.SIM)
    again = system.alloc(8, MemoryTag.SIM)
    assert bytes(again) == bytes(8)


def test_arenas_are_independent(system):
    system.alloc(64, MemoryTag.RENDER)
    system.begin(MemoryTag.SIM)
    assert system.arena(MemoryTag.RENDER).used == 64


def test_arena_exhaustion(system):
    with pytest.raises(OutOfMemoryError):
        system.alloc(kilobytes(4) + 1, MemoryTag.PERMANENT)


def test_bulk_alloc(system):
    block = system.alloc(256, MemoryTag.BULK_DATA)
    assert bytes(block) == bytes(256)
    block[0] = 7
    assert block[0] == 7


def test_bulk_mapping_limit():
    with MemorySystem(arena_capacity=8, heap_capacity=64) as mem:
        with pytest.raises(OutOfMemoryError):
            for _ in range(MAX_MAPPING_COUNT):
                mem.alloc(1, MemoryTag.BULK_DATA)


def test_heap_alloc_and_dealloc(system):
    first = system.alloc(32, MemoryTag.HEAP)
    system.alloc(8, MemoryTag.HEAP)
    system.dealloc(first)
    assert system.alloc(32, MemoryTag.HEAP) == first


def test_heap_exhaustion(system):
    with pytest.raises(OutOfMemoryError):
        system.alloc(kilobytes(128), MemoryTag.HEAP)


def test_unknown_tag_alloc(system):
    with pytest.raises(ValueError):
        system.alloc(8, MemoryTag.UNKNOWN)


@pytest.mark.parametrize("tag", [MemoryTag.HEAP, MemoryTag.BULK_DATA, MemoryTag.UNKNOWN])
def test_begin_rejects_non_arena_tags(system, tag):
    with pytest.raises(ValueError):
        system.begin(tag)


def test_negative_alloc(system):
    with pytest.raises(ValueError):
        system.alloc(-4, MemoryTag.SIM)


def test_closed_system_refuses_work():
    mem = MemorySystem(arena_capacity=16, heap_capacity=64)
    with mem as entered:
        assert entered is mem
    with pytest.raises(RuntimeError):
        mem.alloc(1, MemoryTag.SIM)
    with pytest.raises(RuntimeError):
        mem.begin(MemoryTag.SIM)