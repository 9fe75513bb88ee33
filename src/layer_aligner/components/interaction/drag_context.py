"""Interaction states for the canvas.

One immutable object describes what the pointer is currently doing, replacing a
set of boolean flags.
"""

from dataclasses import dataclass

from layer_aligner.models.transform import Geometry, Vec2


@dataclass(frozen=True)
class Idle:
    """No gesture in progress."""


@dataclass(frozen=True)
class DraggingLayer:
    """Moving a layer; offset is pointer minus layer origin at gesture start."""
    layer_id: str
    pointer_offset: Vec2


@dataclass(frozen=True)
class ResizingLayer:
    """Resizing a layer through one of its eight handles."""
    layer_id: str
    handle: str
    start_geometry: Geometry
    start_pointer: Vec2


@dataclass(frozen=True)
class DraggingGuide:
    """Moving one guide line ('h1'..'h3', 'v1', 'v2')."""
    which: str


IDLE = Idle()
