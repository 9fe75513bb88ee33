"""
Layer Aligner - Alignment Solver

Scales and translates every layer so its marked landmarks land on the reference
layer's (the first layer, never moved):

- Width comes from the eye span, height from the face span (body top to face
  bottom), independently.
- Position puts the layer's eye centre (horizontally) and body-top/face-bottom
  midpoint (vertically) on the reference's, through the same contain-fit
  mapping used for display.
- A consistency check compares where the body bottom lands and the face/body
  proportion against the reference and produces advisory warnings.

All updates of a run are applied behind a single undo checkpoint.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence

from layer_aligner.constants import REFERENCE_LINE_X
from layer_aligner.models.layer import Layer, refs_of
from layer_aligner.models.settings import AlignmentThresholds
from layer_aligner.models.transform import Geometry
from layer_aligner.utils.coordinate_transforms import to_canvas

logger = logging.getLogger('Alignment')


@dataclass(frozen=True)
class ReferenceFrame:
    """Canvas-space landmarks of the reference layer"""
    eye_span_x: float
    face_span_y: float
    body_span_y: float
    eye_center_x: float
    body_face_mid_y: float
    body_bottom_y: float

    @classmethod
    def from_layer(cls, layer: Layer) -> 'ReferenceFrame':
        refs = refs_of(layer)
        eye_left_x, _ = to_canvas(layer, refs.eye_left_x, refs.eye_left_y)
        eye_right_x, _ = to_canvas(layer, refs.eye_right_x, refs.eye_right_y)
        _, body_top_y = to_canvas(layer, REFERENCE_LINE_X, refs.body_top_y)
        _, face_bottom_y = to_canvas(layer, REFERENCE_LINE_X, refs.face_bottom_y)
        _, body_bottom_y = to_canvas(layer, REFERENCE_LINE_X, refs.body_bottom_y)
        return cls(
            eye_span_x=eye_right_x - eye_left_x,
            face_span_y=face_bottom_y - body_top_y,
            body_span_y=body_bottom_y - body_top_y,
            eye_center_x=(eye_left_x + eye_right_x) / 2,
            body_face_mid_y=(body_top_y + face_bottom_y) / 2,
            body_bottom_y=body_bottom_y,
        )


@dataclass
class AlignmentResult:
    """Outcome of an alignment run

    Attributes:
        geometries: New geometry per aligned layer id
        skipped: Ids of layers left untouched (degenerate marks)
        warnings: One human-readable message per inconsistent layer
    """
    geometries: Dict[str, Geometry] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        """All warnings joined for a single notification"""
        return "\n".join(self.warnings)


def solve_layer(layer: Layer, ref: ReferenceFrame,
                thresholds: Optional[AlignmentThresholds] = None) -> Optional[Geometry]:
    """Geometry that lines a layer up with the reference frame

    Returns:
        The solved Geometry, or None when the layer's marks are degenerate
    """
    thresholds = thresholds or AlignmentThresholds()
    refs = refs_of(layer)
    dx_eye = refs.eye_span_x
    dy_face = refs.face_span_y
    if abs(dx_eye) < thresholds.min_span or abs(dy_face) < thresholds.min_span:
        return None

    width = ref.eye_span_x / dx_eye
    height = ref.face_span_y / dy_face
    if not (width > 0 and height > 0 and math.isfinite(width) and math.isfinite(height)):
        return None

    # Where the anchors land with the new size at the origin; the mapping is a
    # pure translation in x/y, so the offset to the target is the position.
    provisional = Geometry(0.0, 0.0, width, height)
    anchor_x, anchor_y = to_canvas(
        _with_geometry(layer, provisional), refs.eye_center_x, refs.body_face_mid_y
    )
    return Geometry(ref.eye_center_x - anchor_x, ref.body_face_mid_y - anchor_y, width, height)


def check_consistency(layer: Layer, geometry: Geometry, ref: ReferenceFrame, index: int,
                      thresholds: Optional[AlignmentThresholds] = None) -> Optional[str]:
    """Warning text when the solved layer disagrees with the reference body, else None

    Flags a layer when its body bottom lands too far from the reference's, or
    when its face/body proportion differs too much. Skipped when the layer's
    body span is degenerate.
    """
    thresholds = thresholds or AlignmentThresholds()
    refs = refs_of(layer)
    dy_body = refs.body_span_y
    if abs(dy_body) < thresholds.min_span:
        return None

    _, body_bottom_y = to_canvas(_with_geometry(layer, geometry), REFERENCE_LINE_X, refs.body_bottom_y)
    gap = abs(body_bottom_y - ref.body_bottom_y)
    gap_limit = thresholds.gap_tolerance(ref.body_span_y)

    ratio = refs.face_span_y / dy_body
    ratio_delta = None
    if ref.body_span_y != 0:
        ratio_delta = abs(ratio - ref.face_span_y / ref.body_span_y)

    reasons = []
    if gap > gap_limit:
        reasons.append(f"body bottom is {gap:.0f}px from the reference")
    if ratio_delta is not None and ratio_delta > thresholds.ratio_tolerance:
        reasons.append(f"face/body proportion differs by {ratio_delta:.2f}")
    if not reasons:
        return None
    return f"Layer {index + 1}: {' and '.join(reasons)}. Check its reference points."


def solve_alignment(layers: Sequence[Layer],
                    thresholds: Optional[AlignmentThresholds] = None) -> AlignmentResult:
    """Compute new geometry for every non-reference layer

    Args:
        layers: Ordered layers; the first is the reference and is never moved
        thresholds: Solver tuning (defaults when None)

    Returns:
        AlignmentResult; empty when fewer than two layers are given
    """
    thresholds = thresholds or AlignmentThresholds()
    result = AlignmentResult()
    if len(layers) < 2:
        return result

    ref = ReferenceFrame.from_layer(layers[0])
    for index, layer in enumerate(layers[1:], start=1):
        geometry = solve_layer(layer, ref, thresholds)
        if geometry is None:
            logger.warning(f"Layer {index + 1} skipped: degenerate reference marks")
            result.skipped.append(layer.id)
            continue
        result.geometries[layer.id] = geometry
        warning = check_consistency(layer, geometry, ref, index, thresholds)
        if warning:
            result.warnings.append(warning)
    return result


def run_auto_align(store, thresholds: Optional[AlignmentThresholds] = None) -> AlignmentResult:
    """Solve and apply alignment on a LayerStore behind one checkpoint

    No-op (no checkpoint) with fewer than two layers. Warnings never block the
    update; they are logged and returned for the caller to show once.
    """
    layers = store.layers
    if len(layers) < 2:
        return AlignmentResult()

    result = solve_alignment(layers, thresholds)
    store.apply_geometries(result.geometries, "Auto align")
    logger.info(f"Aligned {len(result.geometries)} layer(s), skipped {len(result.skipped)}")
    for warning in result.warnings:
        logger.warning(warning)
    return result


def _with_geometry(layer: Layer, geometry: Geometry) -> Layer:
    """Copy of a layer moved/resized to geometry (aspect ratio kept)"""
    return replace(layer, x=geometry.x, y=geometry.y, width=geometry.width, height=geometry.height)
