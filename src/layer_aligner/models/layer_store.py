"""
Layer Aligner - Layer Store

THE MODEL: the authoritative ordered collection of layers.

This class handles:
- Structural edits (add, remove, reorder, move up/down, visibility)
- Geometric edits (set geometry, batch geometry for alignment)
- Reference point edits
- Single selection
- Snapshot API and undo

Every mutation pushes a checkpoint of the pre-mutation state first. The only
exceptions are the asynchronous image-decode correction, the initial layout and
the per-move updates of a drag/resize gesture (whose checkpoint is captured at
gesture start and committed at gesture end by the interaction controller).

Usage:
    store = LayerStore()
    ids = store.add_layers(['a.png', 'b.png'])
    store.set_geometry(ids[0], x=20, y=40)
    store.undo()
"""

import copy
import logging
from typing import Dict, List, Optional, Sequence

from layer_aligner.services import layer_operations
from layer_aligner.utils.history_manager import HistoryManager
from .layer import Layer, ReferencePoints
from .query_mixin import LayerQueryMixin
from .transform import CanvasBounds, Geometry

_GEOMETRY_FIELDS = ('x', 'y', 'width', 'height')


class LayerStore(LayerQueryMixin):
    """Ordered layer collection guarded by an undo history

    Properties:
        layers: Ordered layers, bottom-most first
        selected_id: Id of the selected layer or None
        history: HistoryManager holding pre-mutation snapshots
    """

    def __init__(self, history: Optional[HistoryManager] = None):
        self._logger = logging.getLogger('LayerStore')
        self._layers: List[Layer] = []
        self.selected_id: Optional[str] = None
        self.history = history if history is not None else HistoryManager()

    # ========================================
    # Snapshot API
    # ========================================

    def get_snapshot(self) -> List[Layer]:
        """Deep copy of the full ordered sequence (refs and visibility included)"""
        return copy.deepcopy(self._layers)

    def set_snapshot(self, snapshot: Sequence[Layer]):
        """Replace the live sequence wholesale"""
        self._layers = copy.deepcopy(list(snapshot))
        if self.selected_id is not None and not self.has_layer(self.selected_id):
            self.selected_id = None

    def checkpoint(self, description: str = ""):
        """Push the current state onto the undo history"""
        self.history.checkpoint(self._layers, description)

    def undo(self) -> bool:
        """Restore the state saved before the last mutation

        Returns:
            True if further undo is available
        """
        state = self.history.undo()
        if state is not None:
            self.set_snapshot(state)
            self._logger.debug(f"Undo restored {len(self._layers)} layer(s)")
        return self.history.can_undo()

    # ========================================
    # Structural edits
    # ========================================

    def add_layers(self, images: Sequence) -> List[str]:
        """Append one layer per image on top of the stack

        Args:
            images: Opaque image handles, already filtered by the importer

        Returns:
            Ids of the new layers (empty when nothing was added)
        """
        if not images:
            return []
        self.checkpoint(f"Add {len(images)} layer(s)")
        new_layers = layer_operations.create_layers_from_images(images)
        self._layers.extend(new_layers)
        self._logger.info(f"Added {len(new_layers)} layer(s), total {len(self._layers)}")
        return [layer.id for layer in new_layers]

    def remove_layer(self, layer_id: str) -> bool:
        """Remove a layer by id; clears selection if it was selected"""
        index = self.index_of(layer_id)
        if index < 0:
            return False
        self.checkpoint("Remove layer")
        del self._layers[index]
        if self.selected_id == layer_id:
            self.selected_id = None
        self._logger.debug(f"Removed layer: {layer_id}")
        return True

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Move the layer at from_index so it ends up at to_index"""
        count = len(self._layers)
        if from_index == to_index or not (0 <= from_index < count and 0 <= to_index < count):
            return False
        self.checkpoint("Reorder layers")
        layer = self._layers.pop(from_index)
        self._layers.insert(to_index, layer)
        self._logger.debug(f"Reordered layer {layer.id}: {from_index} -> {to_index}")
        return True

    def move_adjacent(self, index: int, direction: str) -> bool:
        """Swap a layer with its neighbour

        Args:
            index: Position of the layer to move
            direction: 'up' (towards the top of the stack) or 'down'

        Returns:
            False at the bounds (no-op)
        """
        new_index = index + 1 if direction == 'up' else index - 1
        if not (0 <= index < len(self._layers)) or not (0 <= new_index < len(self._layers)):
            return False
        self.checkpoint(f"Move layer {direction}")
        self._layers[index], self._layers[new_index] = self._layers[new_index], self._layers[index]
        return True

    def set_visible(self, layer_id: str, visible: bool) -> bool:
        layer = self.get_layer(layer_id)
        if layer is None:
            return False
        self.checkpoint("Show layer" if visible else "Hide layer")
        layer.visible = visible
        return True

    def toggle_visible(self, layer_id: str) -> bool:
        layer = self.get_layer(layer_id)
        if layer is None:
            return False
        return self.set_visible(layer_id, not layer.visible)

    # ========================================
    # Geometric edits
    # ========================================

    def set_geometry(self, layer_id: str, **partial) -> bool:
        """Checkpointed geometry edit

        Args:
            layer_id: Layer to change
            **partial: Any of x, y, width, height
        """
        layer = self.get_layer(layer_id)
        if layer is None:
            return False
        unknown = set(partial) - set(_GEOMETRY_FIELDS)
        if unknown:
            raise TypeError(f"Unknown geometry field(s): {', '.join(sorted(unknown))}")
        self.checkpoint("Set geometry")
        layer.geometry = layer.geometry.replace(**partial)
        return True

    def apply_geometries(self, geometries: Dict[str, Geometry], description: str = "Apply geometry"):
        """Apply several geometry updates behind a single checkpoint"""
        self.checkpoint(description)
        for layer_id, geometry in geometries.items():
            layer = self.get_layer(layer_id)
            if layer is not None:
                layer.geometry = geometry

    def update_geometry(self, layer_id: str, geometry: Geometry) -> bool:
        """Uncheckpointed geometry write for gestures in progress

        The interaction controller captures the checkpoint at gesture start and
        commits it at gesture end.
        """
        layer = self.get_layer(layer_id)
        if layer is None:
            return False
        layer.geometry = geometry
        return True

    # ========================================
    # Reference points
    # ========================================

    def set_refs(self, layer_id: str, refs: ReferencePoints) -> bool:
        layer = self.get_layer(layer_id)
        if layer is None:
            return False
        self.checkpoint("Mark reference points")
        layer.refs = refs
        return True

    def ensure_refs(self, layer_id: str) -> Optional[ReferencePoints]:
        """Create default reference points on first visit

        Not checkpointed: unset refs already resolve to these defaults.
        """
        layer = self.get_layer(layer_id)
        if layer is None:
            return None
        if layer.refs is None:
            layer.refs = ReferencePoints()
        return layer.refs

    # ========================================
    # Asynchronous / layout corrections (not undoable)
    # ========================================

    def apply_decoded_size(self, layer_id: str, intrinsic_width: float, intrinsic_height: float,
                           bounds: Optional[CanvasBounds] = None) -> bool:
        """Correct aspect ratio and geometry once the image has been decoded

        Tolerates the layer having been removed in the meantime.
        """
        index = self.index_of(layer_id)
        if index < 0 or intrinsic_width <= 0 or intrinsic_height <= 0:
            self._logger.debug(f"Ignoring decoded size for {layer_id}")
            return False
        self._layers[index] = layer_operations.decoded_layer(self._layers[index], intrinsic_width, intrinsic_height, bounds)
        return True

    def drop_layer(self, layer_id: str) -> bool:
        """Remove a placeholder whose image could not be read

        Not checkpointed: the layer never held a real image.
        """
        index = self.index_of(layer_id)
        if index < 0:
            return False
        del self._layers[index]
        if self.selected_id == layer_id:
            self.selected_id = None
        self._logger.debug(f"Dropped unreadable layer: {layer_id}")
        return True

    def layout_new_layers(self, bounds: Optional[CanvasBounds]):
        """Lay every layer out for the given canvas size"""
        self._layers = layer_operations.layout_new_layers(bounds, self._layers)

    # ========================================
    # Selection
    # ========================================

    def select(self, layer_id: Optional[str]):
        if layer_id is not None and not self.has_layer(layer_id):
            return
        self.selected_id = layer_id

    def clear_selection(self):
        self.selected_id = None
