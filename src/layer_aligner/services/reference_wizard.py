"""
Layer Aligner - Reference Point Wizard

Guided capture of the five reference points of every layer, one layer at a time,
the reference layer (first in the sequence) first.

The cursor is a (layer index, step) pair. Recording a pick writes the step's
field(s) into the current layer's reference points and moves to the next step,
then to step 0 of the next layer, and stays put after the last step of the last
layer (the flow is then complete). The wizard only ever touches reference points,
never geometry.
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple

from layer_aligner.constants import REFERENCE_LINE_X
from layer_aligner.models.layer import refs_of
from layer_aligner.models.transform import Vec2
from layer_aligner.utils.coordinate_transforms import clamp01, to_canvas

logger = logging.getLogger(__name__)


class WizardStep(Enum):
    """Capture steps in their fixed order

    Each value is (x field or None, y field, prompt). Horizontal body lines only
    record Y.
    """
    BODY_TOP = (None, 'body_top_y', "Click the top of the body")
    FACE_BOTTOM = (None, 'face_bottom_y', "Click the bottom of the face")
    BODY_BOTTOM = (None, 'body_bottom_y', "Click the bottom of the body")
    EYE_LEFT = ('eye_left_x', 'eye_left_y', "Click the left eye")
    EYE_RIGHT = ('eye_right_x', 'eye_right_y', "Click the right eye")

    def __init__(self, x_field, y_field, prompt):
        self.x_field = x_field
        self.y_field = y_field
        self.prompt = prompt

    @property
    def index(self) -> int:
        return STEPS.index(self)

    def values_for(self, u: float, v: float) -> dict:
        """Fields written by this step for a normalized pick"""
        values = {self.y_field: v}
        if self.x_field is not None:
            values[self.x_field] = u
        return values

    def point_of(self, refs) -> Tuple[float, float]:
        """Normalized point this step designates in a set of reference points"""
        u = getattr(refs, self.x_field) if self.x_field is not None else REFERENCE_LINE_X
        return u, getattr(refs, self.y_field)


STEPS: List[WizardStep] = list(WizardStep)
LAST_STEP = len(STEPS) - 1


class ReferenceWizard:
    """Step-indexed reference point capture over all layers of a store"""

    def __init__(self, store):
        """
        Args:
            store: LayerStore whose layers are marked
        """
        self.store = store
        self.active = False
        self.layer_index = 0
        self.step_index = 0
        self._completed = False

    # ========================================
    # Lifecycle
    # ========================================

    def begin(self) -> bool:
        """Start at step 0 of the reference layer

        Returns:
            False when there are no layers to mark
        """
        if self.store.get_layer_count() == 0:
            return False
        self.active = True
        self.layer_index = 0
        self.step_index = 0
        self._completed = False
        self._visit_current_layer()
        logger.debug("Wizard started")
        return True

    def finish(self):
        """Leave the wizard (marks already recorded are kept)"""
        self.active = False
        logger.debug("Wizard closed")

    # ========================================
    # Cursor
    # ========================================

    @property
    def step(self) -> WizardStep:
        return STEPS[self.step_index]

    @property
    def prompt(self) -> str:
        return self.step.prompt

    @property
    def current_layer(self):
        layers = self.store.layers
        if not self.active or not 0 <= self.layer_index < len(layers):
            return None
        return layers[self.layer_index]

    @property
    def current_layer_id(self) -> Optional[str]:
        layer = self.current_layer
        return layer.id if layer is not None else None

    @property
    def is_complete(self) -> bool:
        """The final step of the final layer has been recorded"""
        return self._completed

    def next_target(self) -> Optional[Tuple[int, int]]:
        """(layer index, step index) that Next would move to, or None"""
        if self.step_index < LAST_STEP:
            return self.layer_index, self.step_index + 1
        if self.layer_index + 1 < self.store.get_layer_count():
            return self.layer_index + 1, 0
        return None

    def previous_target(self) -> Optional[Tuple[int, int]]:
        """(layer index, step index) that Prev would move to, or None"""
        if self.step_index > 0:
            return self.layer_index, self.step_index - 1
        if self.layer_index > 0:
            return self.layer_index - 1, LAST_STEP
        return None

    def advance_step(self) -> bool:
        """Move to the next step without recording; False when there is none"""
        target = self.next_target()
        if target is None:
            return False
        self._move_to(*target)
        return True

    def retreat_step(self) -> bool:
        """Move to the previous step; False at the very first step"""
        target = self.previous_target()
        if target is None:
            return False
        self._completed = False
        self._move_to(*target)
        return True

    # ========================================
    # Recording
    # ========================================

    def record_pick(self, u: float, v: float) -> bool:
        """Record a normalized pick for the current step and advance

        Args:
            u, v: Pick position in the current layer's image space; clamped to [0, 1]

        Returns:
            False when the wizard is not running on an existing layer
        """
        layer = self.current_layer
        if layer is None:
            return False
        u, v = clamp01(u), clamp01(v)
        step = self.step
        self.store.set_refs(layer.id, refs_of(layer).with_values(**step.values_for(u, v)))
        logger.debug(f"Layer {self.layer_index} {step.name} = ({u:.3f}, {v:.3f})")

        if not self.advance_step():
            self._completed = True
            logger.info("Reference points recorded for all layers")
        return True

    def marker_positions(self) -> List[Tuple[WizardStep, Vec2]]:
        """Canvas positions of the current layer's five points, for crosshairs"""
        layer = self.current_layer
        if layer is None:
            return []
        refs = refs_of(layer)
        return [(step, Vec2(*to_canvas(layer, *step.point_of(refs)))) for step in STEPS]

    def _move_to(self, layer_index: int, step_index: int):
        self.layer_index = layer_index
        self.step_index = step_index
        self._visit_current_layer()

    def _visit_current_layer(self):
        layer = self.current_layer
        if layer is not None:
            self.store.ensure_refs(layer.id)
