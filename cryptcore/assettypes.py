"""Asset and game-object data types: glTF enumerations, entities and animations."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .mathtypes import Rect, Vec2f, Vec4f

MAX_ANIMATION_SAMPLER_INPUT_COUNT = 64
MAX_ANIMATION_SAMPLER_OUTPUT_COUNT = 64
MAX_ANIMATION_CHANNEL_COUNT = 64
MAX_ANIMATIONS_PER_MODEL = 32
MAX_TEXTURES_PER_MODEL = 4
MAX_NODES_PER_MODEL = 64
MAX_BONES_PER_SKIN = 256
MAX_BUFFERS_PER_RENDERBUFFER = 3


class BufferViewTarget(enum.IntEnum):
    ARRAY_BUFFER = 34962
    ELEMENT_ARRAY_BUFFER = 34963


class AccessorComponentType(enum.IntEnum):
    SIGNED_BYTE = 5120
    UNSIGNED_BYTE = 5121
    SIGNED_SHORT = 5122
    UNSIGNED_SHORT = 5123
    UNSIGNED_INT = 5125
    FLOAT = 5126


class AccessorDataType(enum.IntEnum):
    SCALAR = 0
    VEC2 = 1
    VEC3 = 2
    VEC4 = 3
    MAT2 = 4
    MAT3 = 5
    MAT4 = 6


class PrimitiveTopology(enum.IntEnum):
    POINTS = 0
    LINES = 1
    LINE_LOOP = 2
    LINE_STRIP = 3
    TRIANGLES = 4
    TRIANGLE_STRIP = 5
    TRIANGLE_FAN = 6


class AnimationChannelPath(enum.IntEnum):
    TRANSLATION = 0
    ROTATION = 1
    SCALE = 2
    WEIGHTS = 3


class AnimationSamplerInterpolation(enum.IntEnum):
    STEP = 0
    LINEAR = 1
    SPHERICAL_LINEAR = 2
    CUBIC_SPLINE = 3


class AlphaMode(enum.IntEnum):
    OPAQUE = 0
    MASK = 1
    BLEND = 2


class SamplerFilter(enum.IntEnum):
    NEAREST_FILTER = 9728
    LINEAR_FILTER = 9729
    NEAREST_MIPMAP_NEAREST_FILTER = 9984
    LINEAR_MIPMAP_NEAREST_FILTER = 9985
    NEAREST_MIPMAP_LINEAR_FILTER = 9986
    # Shares its value with the one above, so it is an alias of it.
    LINEAR_MIPMAP_LINEAR_FILTER = 9986


class SamplerWrap(enum.IntEnum):
    CLAMP_TO_EDGE = 33071
    MIRRORED_REPEAT = 33648
    REPEAT = 10497


class AssetType(enum.IntEnum):
    TEXTURE = 0
    SKINNED_MODEL = 1


class RenderbufferType(enum.IntEnum):
    VERTEX_BUFFER = 0
    INDEX_BUFFER = 1
    UNIFORM_BUFFER = 2
    STAGING_BUFFER = 3
    READ_BUFFER = 4
    STORAGE_BUFFER = 5


class DescriptorSetType(enum.IntEnum):
    """Index of a descriptor set layout in a shader."""

    SET0 = 0
    SET1 = 1


class EntityType(enum.IntEnum):
    PLAYER = 0
    TILE = 1
    ENEMY = 2
    WEAPON = 3
    WIDGET = 4
    UNKNOWN = 5


class WidgetType(enum.IntEnum):
    FPS = 0
    DIALOGUE = 1
    DAMAGE_NUMBER = 2
    MAX = 3


class EntityState(enum.IntEnum):
    IDLE = 0
    RUN = 1
    MELEE = 2
    RANGED = 3
    HIT = 4
    DEAD = 5
    MAX = 6


class WeaponSlot(enum.IntEnum):
    MAIN_HAND = 0
    OFF_HAND = 1
    TWO_HANDED = 2
    MAX = 3


class EntityFlags(enum.IntFlag):
    NONE = 0
    CAN_COLLIDE = 0x1


@dataclass
class TextLabel:
    """Text drawn relative to its owning entity."""

    text: str = ""
    font: Optional[Any] = None
    offset: Vec2f = Vec2f()
    timer: float = 0.0
    # When the label fades away, or how often it refreshes.
    duration: float = 0.0


@dataclass
class Entity:
    """A placed game object with a bounding rectangle."""

    id: int = 0
    rect: Rect = Rect()
    z_index: int = 0
    state: EntityState = EntityState.IDLE
    type: EntityType = EntityType.UNKNOWN
    flags: EntityFlags = EntityFlags.NONE
    data: Optional[Any] = None

    @property
    def p(self) -> Vec2f:
        """Position: the rectangle's minimum corner."""
        return self.rect.min

    @p.setter
    def p(self, value: Vec2f) -> None:
        self.rect = Rect(value, self.rect.size)

    @property
    def size(self) -> Vec2f:
        return self.rect.size

    @size.setter
    def size(self, value: Vec2f) -> None:
        self.rect = Rect(self.rect.min, value)

    def can_collide(self) -> bool:
        return bool(self.flags & EntityFlags.CAN_COLLIDE)


@dataclass
class Renderbuffer:
    """Backend-independent buffer made of up to three backend buffers."""

    type: RenderbufferType = RenderbufferType.VERTEX_BUFFER
    buffers: List[int] = field(default_factory=list)
    used: int = 0
    size: int = 0

    @property
    def buffer_count(self) -> int:
        return len(self.buffers)

    def add_buffer(self, handle: int) -> int:
        """Attach a backend buffer handle and return its slot."""
        if len(self.buffers) >= MAX_BUFFERS_PER_RENDERBUFFER:
            raise OverflowError(
                f"a renderbuffer holds at most {MAX_BUFFERS_PER_RENDERBUFFER} buffers"
            )
        self.buffers.append(handle)
        return len(self.buffers) - 1


@dataclass
class AnimationSampler:
    """Keyframe times and their values."""

    interpolation: AnimationSamplerInterpolation = AnimationSamplerInterpolation.LINEAR
    inputs: List[float] = field(default_factory=list)
    outputs: List[Vec4f] = field(default_factory=list)

    @property
    def input_count(self) -> int:
        return len(self.inputs)

    @property
    def output_count(self) -> int:
        return len(self.outputs)

    def add_keyframe(self, time: float, value: Vec4f) -> None:
        if len(self.inputs) >= MAX_ANIMATION_SAMPLER_INPUT_COUNT:
            raise OverflowError("too many sampler inputs")
        if len(self.outputs) >= MAX_ANIMATION_SAMPLER_OUTPUT_COUNT:
            raise OverflowError("too many sampler outputs")
        self.inputs.append(float(time))
        self.outputs.append(value)


@dataclass(frozen=True)
class AnimationChannel:
    """Links a sampler to the property of a node it drives."""

    path: AnimationChannelPath = AnimationChannelPath.TRANSLATION
    node: int = 0
    sampler: int = 0


@dataclass
class Animation:
    samplers: List[AnimationSampler] = field(default_factory=list)
    channels: List[AnimationChannel] = field(default_factory=list)
    start_time: float = 0.0
    end_time: float = 0.0
    current_time: float = 0.0

    @property
    def sampler_count(self) -> int:
        return len(self.samplers)

    @property
    def channel_count(self) -> int:
        return len(self.channels)

    def add_sampler(self, sampler: AnimationSampler) -> int:
        """Append a sampler and return its index."""
        self.samplers.append(sampler)
        return len(self.samplers) - 1

    def add_channel(self, channel: AnimationChannel) -> int:
        """Append a channel and return its index."""
        if len(self.channels) >= MAX_ANIMATION_CHANNEL_COUNT:
            raise OverflowError("too many animation channels")
        self.channels.append(channel)
        return len(self.channels) - 1