"""
Layer Aligner - Guide Lines

Three horizontal and two vertical lines in normalized canvas space (0-1). They
are a visual aid only: not used by alignment and not covered by undo.
"""

import logging
from typing import Dict, Optional, Sequence

from layer_aligner.constants import (
    DEFAULT_GUIDE_H1, DEFAULT_GUIDE_H2, DEFAULT_GUIDE_H3,
    DEFAULT_GUIDE_V1, DEFAULT_GUIDE_V2,
    HORIZONTAL_GUIDES, VERTICAL_GUIDES,
    GUIDE_SNAP_THRESHOLD, GUIDE_HIT_TOLERANCE,
)
from layer_aligner.utils.coordinate_transforms import clamp01
from layer_aligner.utils.snapping import snap_within
from .transform import CanvasBounds


class GuideLines:
    """Guide line positions plus the show/lock/snap toggles

    Properties:
        positions: {'h1': y, 'h2': y, 'h3': y, 'v1': x, 'v2': x} normalized
        visible: Guides are drawn and can be picked up
        locked: Guides cannot be dragged
        snap_to_layer_centers: Dragged guides snap to layer centres
    """

    def __init__(self, visible: bool = True, locked: bool = False, snap_to_layer_centers: bool = True):
        self._logger = logging.getLogger('Guides')
        self.positions: Dict[str, float] = {
            'h1': DEFAULT_GUIDE_H1,
            'h2': DEFAULT_GUIDE_H2,
            'h3': DEFAULT_GUIDE_H3,
            'v1': DEFAULT_GUIDE_V1,
            'v2': DEFAULT_GUIDE_V2,
        }
        self.visible = visible
        self.locked = locked
        self.snap_to_layer_centers = snap_to_layer_centers

    @staticmethod
    def is_horizontal(which: str) -> bool:
        return which in HORIZONTAL_GUIDES

    def __getitem__(self, which: str) -> float:
        return self.positions[which]

    def hit_test(self, px: float, py: float, bounds: CanvasBounds) -> Optional[str]:
        """Guide whose hit band contains the pixel position, or None

        Horizontal guides are checked first. Hidden guides never hit.
        """
        if not self.visible:
            return None
        for which in HORIZONTAL_GUIDES:
            if abs(py - self.positions[which] * bounds.height) <= GUIDE_HIT_TOLERANCE:
                return which
        for which in VERTICAL_GUIDES:
            if abs(px - self.positions[which] * bounds.width) <= GUIDE_HIT_TOLERANCE:
                return which
        return None

    def drag_to(self, which: str, px: float, py: float, bounds: CanvasBounds, layers: Sequence = ()) -> float:
        """Move a guide to follow the pointer

        The position is clamped to [0, 1]. With snapping on, horizontal guides snap
        to layer vertical centres and vertical guides to layer horizontal centres
        when closer than GUIDE_SNAP_THRESHOLD.

        Returns:
            The new normalized position
        """
        pos = bounds.normalize(px, py)
        if self.is_horizontal(which):
            value = clamp01(pos.y)
            snaps = [(layer.y + layer.height / 2) / bounds.height for layer in layers]
        else:
            value = clamp01(pos.x)
            snaps = [(layer.x + layer.width / 2) / bounds.width for layer in layers]

        if self.snap_to_layer_centers and snaps:
            value = snap_within(value, snaps, GUIDE_SNAP_THRESHOLD)

        self.positions[which] = value
        return value
