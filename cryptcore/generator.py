"""Random dungeon generation: rooms, winding corridors, doors, no dead ends.

Rooms are scattered over a wall-filled grid, the space left between them
is filled with mazes, every pair of touching regions is joined through a
door, and corridors leading nowhere are filled back in.
"""

from __future__ import annotations

import argparse
import enum
import heapq
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .mathtypes import Rect, Vec2f, Vec2i

GRID_SIZE = 127
ROOM_COUNT = 50
MAX_ROOM_TRIES = 250
FIRST_ROOM_SIZE = 11
MIN_ROOM_SIZE = 9.0
MAX_ROOM_SIZE = 18.0

WALL_TILE_ID = 11
FLOOR_TILE_ID = 140

DEFAULT_OUTPUT_DIR = "assets/tilemaps"
TILE_MAP_NAME = "dungeon.map"
REGION_MAP_NAME = "test.map"

_CARDINAL = (Vec2i(-1, 0), Vec2i(0, 1), Vec2i(0, -1), Vec2i(1, 0))


class Tile(enum.IntEnum):
    INVALID = 0
    WALL = 1
    FLOOR = 2


class Grid:
    """A width x height map of tiles, each tagged with a region number."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("grid dimensions must be positive")
        self.width = width
        self.height = height
        self.region_count = 0
        self._tiles: List[Tile] = [Tile.WALL] * (width * height)
        self._regions: List[int] = [0] * (width * height)

    def _inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def _index(self, row: int, col: int) -> int:
        if not self._inside(row, col):
            raise IndexError(f"cell ({row}, {col}) lies outside the grid")
        return row * self.width + col

    def tile(self, row: int, col: int) -> Tile:
        """The tile at a cell, or Tile.INVALID outside the grid."""
        if not self._inside(row, col):
            return Tile.INVALID
        return self._tiles[row * self.width + col]

    def region(self, row: int, col: int) -> int:
        """The region of a cell, or 0 outside the grid."""
        if not self._inside(row, col):
            return 0
        return self._regions[row * self.width + col]

    def set_tile(self, row: int, col: int, tile: Tile) -> None:
        self._tiles[self._index(row, col)] = Tile(tile)

    def set_region(self, row: int, col: int, region: int) -> None:
        if region < 0:
            raise ValueError("region numbers cannot be negative")
        self._regions[self._index(row, col)] = region

    def set(self, row: int, col: int, tile: Tile, region: int) -> None:
        """Set both the tile and the region of a cell."""
        index = self._index(row, col)
        if region < 0:
            raise ValueError("region numbers cannot be negative")
        self._tiles[index] = Tile(tile)
        self._regions[index] = region

    def new_region(self) -> int:
        """Open a new region and return its number."""
        self.region_count += 1
        return self.region_count


@dataclass(frozen=True)
class _Connector:
    """A wall cell that would join its owner's region to another."""

    point: Vec2i
    region: int


def _in_range(rng: random.Random, low: float, high: float) -> float:
    return low + rng.random() * (high - low)


def _rects_overlap(a: Rect, b: Rect) -> bool:
    return (
        a.min.x < b.min.x + b.size.x
        and b.min.x < a.min.x + a.size.x
        and a.min.y < b.min.y + b.size.y
        and b.min.y < a.min.y + a.size.y
    )


def _can_carve(grid: Grid, p: Vec2i, direction: Vec2i) -> bool:
    x_far = p.x + direction.x * 3
    y_far = p.y + direction.y * 3
    if not (0 <= p.x < grid.width and 0 <= x_far < grid.width):
        return False
    if not (0 <= p.y < grid.height and 0 <= y_far < grid.height):
        return False
    return grid.tile(p.y + direction.y * 2, p.x + direction.x * 2) == Tile.WALL


def grow_maze(grid: Grid, x: int, y: int, rng: Optional[random.Random] = None) -> int:
    """Carve a new maze region from (x, y) by depth-first walking; return its number."""
    rng = rng if rng is not None else random.Random()
    region = grid.new_region()
    stack = [Vec2i(x, y)]
    while stack:
        current = stack[-1]
        options = [d for d in _CARDINAL if _can_carve(grid, current, d)]
        if not options:
            stack.pop()
            continue
        direction = options[rng.randrange(len(options))]
        grid.set(current.y + direction.y, current.x + direction.x, Tile.FLOOR, region)
        nxt = Vec2i(current.x + direction.x * 2, current.y + direction.y * 2)
        grid.set(nxt.y, nxt.x, Tile.FLOOR, region)
        stack.append(nxt)
    return region


def connect_regions(grid: Grid) -> None:
    """Open one door in the wall between every pair of touching regions."""
    connectors: Dict[int, List[_Connector]] = {
        region: [] for region in range(1, grid.region_count + 1)
    }

    for row in range(1, grid.height - 1):
        for col in range(1, grid.width - 1):
            if grid.tile(row, col) != Tile.WALL:
                continue
            source = 0
            target = 0
            for d in _CARDINAL:
                region = grid.region(row + d.y, col + d.x)
                tile = grid.tile(row + d.y, col + d.x)
                if tile == Tile.FLOOR and region != 0:
                    if source == 0:
                        source = region
                    elif target == 0 and region != source:
                        target = region
                if source and target:
                    point = Vec2i(col, row)
                    connectors[source].append(_Connector(point, target))
                    connectors[target].append(_Connector(point, source))
                    break

    for source in range(1, grid.region_count + 1):
        remaining = list(connectors[source])
        while remaining:
            door = remaining[0]
            target = door.region
            grid.set(door.point.y, door.point.x, Tile.FLOOR, source)
            remaining = [c for c in remaining[1:] if c.region != target]

            # Entries at the front of the other region's list that lead back
            # here are kept, so that pair may later gain a second door.
            others = connectors.get(target, [])
            lead = 0
            while lead < len(others) and others[lead].region == source:
                lead += 1
            connectors[target] = others[:lead] + [
                c for c in others[lead:] if c.region != source
            ]


def _exits(grid: Grid, row: int, col: int) -> int:
    return sum(1 for d in _CARDINAL if grid.tile(row + d.y, col + d.x) != Tile.WALL)


def remove_dead_ends(grid: Grid) -> None:
    """Fill in floor cells with a single open neighbour until none remain.

    Cells are visited in row-major passes, each removal taking effect at
    once; only cells whose surroundings changed are looked at again.
    """
    width = grid.width

    def interior(row: int, col: int) -> bool:
        return 1 <= row < grid.height - 1 and 1 <= col < width - 1

    pending = {
        row * width + col
        for row in range(1, grid.height - 1)
        for col in range(1, width - 1)
        if grid.tile(row, col) != Tile.WALL
    }
    while pending:
        current = sorted(pending)
        heapq.heapify(current)
        queued = set(current)
        next_pass = set()
        while current:
            index = heapq.heappop(current)
            queued.discard(index)
            row, col = divmod(index, width)
            if grid.tile(row, col) == Tile.WALL or _exits(grid, row, col) != 1:
                continue
            grid.set_tile(row, col, Tile.WALL)
            for d in _CARDINAL:
                n_row, n_col = row + d.y, col + d.x
                if not interior(n_row, n_col):
                    continue
                n_index = n_row * width + n_col
                if n_index > index:
                    if n_index not in queued:
                        heapq.heappush(current, n_index)
                        queued.add(n_index)
                else:
                    next_pass.add(n_index)
        pending = next_pass


def generate_dungeon(rng: Optional[random.Random] = None) -> Grid:
    """Build a complete dungeon grid."""
    rng = rng if rng is not None else random.Random()
    grid = Grid(GRID_SIZE, GRID_SIZE)
    map_width = float(grid.width)
    map_height = float(grid.height)

    first_region = grid.new_region()
    rooms = [Rect(Vec2f(1, 1), Vec2f(FIRST_ROOM_SIZE, FIRST_ROOM_SIZE))]
    for row in range(1, FIRST_ROOM_SIZE + 1):
        for col in range(1, FIRST_ROOM_SIZE + 1):
            grid.set(row, col, Tile.FLOOR, first_region)

    for _ in range(MAX_ROOM_TRIES):
        # Rooms have odd sizes and odd positions so they line up with the maze.
        width = int(_in_range(rng, MIN_ROOM_SIZE, MAX_ROOM_SIZE))
        height = int(_in_range(rng, MIN_ROOM_SIZE, MAX_ROOM_SIZE))
        if width % 2 == 0:
            width += 1
        if height % 2 == 0:
            height += 1

        x = int(_in_range(rng, 0, map_width - width))
        y = int(_in_range(rng, 0, map_height - height))
        if x % 2 == 0:
            x += 1
        if y % 2 == 0:
            y += 1

        room = Rect(Vec2f(x, y), Vec2f(width, height))
        if any(_rects_overlap(room, other) for other in rooms):
            continue

        rooms.append(room)
        region = grid.new_region()
        for row in range(y, y + height):
            for col in range(x, x + width):
                grid.set(row, col, Tile.FLOOR, region)
        if len(rooms) == ROOM_COUNT:
            break

    for row in range(1, grid.height, 2):
        for col in range(1, grid.width, 2):
            if grid.tile(row, col) == Tile.WALL:
                grow_maze(grid, col, row, rng)

    connect_regions(grid)
    remove_dead_ends(grid)
    return grid


def render_tile_map(grid: Grid) -> str:
    """Tile map text: one line per row of comma-terminated tile ids."""
    return "".join(
        "".join(
            f"{FLOOR_TILE_ID if grid.tile(row, col) == Tile.FLOOR else WALL_TILE_ID:03d},"
            for col in range(grid.width)
        )
        + "\n"
        for row in range(grid.height)
    )


def render_region_map(grid: Grid) -> str:
    """Region numbers laid out like the tile map, for inspection."""
    return "".join(
        "".join(f"{grid.region(row, col):03d}," for col in range(grid.width)) + "\n"
        for row in range(grid.height)
    )


def create_dungeon(
    directory: "str | Path" = DEFAULT_OUTPUT_DIR, rng: Optional[random.Random] = None
) -> Grid:
    """Generate a dungeon and write its tile and region maps into directory."""
    grid = generate_dungeon(rng)
    out = Path(directory)
    (out / TILE_MAP_NAME).write_bytes(render_tile_map(grid).encode("ascii"))
    (out / REGION_MAP_NAME).write_bytes(render_region_map(grid).encode("ascii"))
    return grid


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a random dungeon map.")
    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT_DIR,
        help="directory to write the map files into",
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)
    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    create_dungeon(args.output, rng)
    print("SUCCESS")
    return 0