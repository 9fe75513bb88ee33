"""
Layer Aligner - Layer Data Model

A layer is one imported image placed on the shared canvas:
- Stable UUID identity (survives reordering and undo)
- Geometry in canvas pixels
- Intrinsic aspect ratio (fixed once the image is decoded)
- Visibility flag
- Optional reference points marked by the alignment wizard

This is part of the MODEL layer - pure data, no UI logic.

Usage:
    layer = Layer.create('portrait.png', index=0)
    refs = refs_of(layer)            # defaults when never marked
    layer.refs = refs.with_values(body_top_y=0.18)
"""

import uuid as uuid_module
from dataclasses import dataclass, field, replace, asdict
from typing import Optional, Dict, Any

from layer_aligner.constants import (
    DEFAULT_BODY_TOP_Y, DEFAULT_FACE_BOTTOM_Y, DEFAULT_BODY_BOTTOM_Y,
    DEFAULT_EYE_LEFT, DEFAULT_EYE_RIGHT,
    PLACEHOLDER_X, PLACEHOLDER_Y, PLACEHOLDER_STAGGER,
    PLACEHOLDER_WIDTH, PLACEHOLDER_HEIGHT, PLACEHOLDER_ASPECT_RATIO,
)
from .transform import Geometry


@dataclass(frozen=True)
class ReferencePoints:
    """Five anatomical landmarks in the layer's own normalized image space.

    The three body lines are horizontal, so only their Y is stored. Eyes are
    full points.
    """
    body_top_y: float = DEFAULT_BODY_TOP_Y
    face_bottom_y: float = DEFAULT_FACE_BOTTOM_Y
    body_bottom_y: float = DEFAULT_BODY_BOTTOM_Y
    eye_left_x: float = DEFAULT_EYE_LEFT[0]
    eye_left_y: float = DEFAULT_EYE_LEFT[1]
    eye_right_x: float = DEFAULT_EYE_RIGHT[0]
    eye_right_y: float = DEFAULT_EYE_RIGHT[1]

    def with_values(self, **values) -> 'ReferencePoints':
        return replace(self, **values)

    @property
    def eye_span_x(self) -> float:
        return self.eye_right_x - self.eye_left_x

    @property
    def face_span_y(self) -> float:
        return self.face_bottom_y - self.body_top_y

    @property
    def body_span_y(self) -> float:
        return self.body_bottom_y - self.body_top_y

    @property
    def eye_center_x(self) -> float:
        return (self.eye_left_x + self.eye_right_x) / 2

    @property
    def body_face_mid_y(self) -> float:
        return (self.body_top_y + self.face_bottom_y) / 2

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReferencePoints':
        """Build from a dict, defaulting missing keys and ignoring unknown ones"""
        known = {k: float(v) for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass
class Layer:
    """One imported image with its own geometry, visibility and reference points

    Properties:
        id: UUID string, stable across reordering and undo
        source: Opaque image handle (a file path for the Qt shell and CLI)
        x, y, width, height: Box in canvas pixels
        aspect_ratio: Intrinsic image width / height
        visible: Painted and hit-tested only when True
        refs: ReferencePoints, or None until the wizard first visits the layer
    """
    source: Any
    x: float
    y: float
    width: float
    height: float
    aspect_ratio: float = PLACEHOLDER_ASPECT_RATIO
    visible: bool = True
    refs: Optional[ReferencePoints] = None
    id: str = field(default_factory=lambda: str(uuid_module.uuid4()))

    @classmethod
    def create(cls, source: Any, index: int = 0) -> 'Layer':
        """New layer with staggered placeholder geometry for the index-th image of a batch"""
        offset = index * PLACEHOLDER_STAGGER
        return cls(
            source=source,
            x=PLACEHOLDER_X + offset,
            y=PLACEHOLDER_Y + offset,
            width=PLACEHOLDER_WIDTH,
            height=PLACEHOLDER_HEIGHT,
        )

    @property
    def geometry(self) -> Geometry:
        return Geometry(self.x, self.y, self.width, self.height)

    @geometry.setter
    def geometry(self, value: Geometry):
        self.x, self.y, self.width, self.height = value.x, value.y, value.width, value.height

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'source': self.source,
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'aspect_ratio': self.aspect_ratio,
            'visible': self.visible,
            'refs': self.refs.to_dict() if self.refs is not None else None,
        }


def refs_of(layer: Layer) -> ReferencePoints:
    """Reference points of a layer, falling back to the defaults when unmarked"""
    return layer.refs if layer.refs is not None else ReferencePoints()
