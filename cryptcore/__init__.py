"""Vector math, memory arenas, asset types and dungeon generation for a 2D role-playing engine."""

__version__ = "0.1.0"

__all__ = ["assettypes", "generator", "heap", "mathtypes", "mathutils", "memory"]