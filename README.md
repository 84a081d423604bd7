# cryptcore

Core building blocks for a small 2D role-playing game engine:

- `cryptcore.mathtypes`: immutable value types `Vec2i`, `Vec3i`, `Vec4i`, `Vec2f`, `Vec3f`, `Vec4f`, `Mat4f`, `Rect` and `Quat`.
- `cryptcore.mathutils`: matrix, vector and quaternion helpers (`mat4_multiply`, `mat4_look_at`, `mat4_perspective`, `mat4_orthographic`, `mat4_inverse`, `transform_from_trs`, `quat_slerp` and more). Each returns a new value.
- `cryptcore.heap`: a first-fit heap allocator (`HeapAllocator`) over a simulated address range, with chunk splitting and merging of free neighbours.
- `cryptcore.memory`: tagged memory (`MemorySystem`, `MemoryTag`, `MemoryArena`) with three resettable arenas, a heap and bulk blocks.
- `cryptcore.assettypes`: glTF-style enumerations and the engine's `Entity`, `TextLabel`, `Renderbuffer` and animation records.
- `cryptcore.generator`: a rooms-and-mazes dungeon generator.

## Installing

```
pip install .
```

## Generating a dungeon

The generator places up to 50 non-overlapping rooms on a 127×127 grid,
carves mazes between them, opens a door between touching regions and then
fills in dead ends.

```
cryptcore-dungeon --output assets/tilemaps --seed 42
```

This writes `dungeon.map` (tile ids: `140` for floor, `011` for wall) and
`test.map` (region numbers) into the output directory, which defaults to
`assets/tilemaps` and must already exist. `--seed` makes the result
repeatable; without it each run differs.

From Python:

```python
import random
from cryptcore.generator import generate_dungeon, render_tile_map

grid = generate_dungeon(random.Random(42))
print(render_tile_map(grid))
```

`create_dungeon(directory, rng)` does the same and writes both map files.

## Math

```python
from cryptcore.mathtypes import Vec3f
from cryptcore.mathutils import mat4_look_at, mat4_perspective, mat4_multiply

view = mat4_look_at(Vec3f(0, 0, 5), Vec3f(0, 0, 0), Vec3f(0, 1, 0))
proj = mat4_perspective(0.5, 16 / 9, 0.1, 100.0)
view_proj = mat4_multiply(view, proj)
```

`vec3_normalize` and `vec4_normalize` raise `ValueError` for a zero vector,
and `mat4_inverse` raises `ValueError` for a singular matrix.

## Memory

```python
from cryptcore.memory import MemorySystem, MemoryTag

with MemorySystem(arena_capacity=1024, heap_capacity=4096) as memory:
    block = memory.alloc(64, MemoryTag.SIM)   # a zeroed, writable memoryview
    block[0] = 7
    address = memory.alloc(32, MemoryTag.HEAP)  # an integer address
    memory.dealloc(address)
    memory.begin(MemoryTag.SIM)  # the simulation arena is empty again
```

An arena or heap that runs out of room raises `OutOfMemoryError`. After
`close()` (or leaving the `with` block) the system refuses further use.

## What it does not do

The package holds no renderer, window, input handling or asset loader: the
asset types describe data but nothing here reads model or texture files,
and nothing draws the generated dungeon.

## Tests

```
pip install .[test]
pytest
```