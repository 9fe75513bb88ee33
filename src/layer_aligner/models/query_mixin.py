"""
Layer Store Query Mixin

Read-only access to the layer sequence. Nothing here mutates state or touches
history.
"""

from typing import List, Optional

from .layer import Layer


class LayerQueryMixin:
    """Mixin providing read access for LayerStore

    This mixin assumes the parent class has:
        - self._layers: list of Layer, bottom-most first
        - self.selected_id: Optional[str]
    """

    @property
    def layers(self) -> List[Layer]:
        """Ordered layers, bottom-most first (a shallow copy of the sequence)"""
        return list(self._layers)

    def get_layer_count(self) -> int:
        return len(self._layers)

    def get_layer(self, layer_id: str) -> Optional[Layer]:
        for layer in self._layers:
            if layer.id == layer_id:
                return layer
        return None

    def has_layer(self, layer_id: str) -> bool:
        return self.get_layer(layer_id) is not None

    def index_of(self, layer_id: str) -> int:
        """Position of a layer in the sequence, -1 when unknown"""
        for i, layer in enumerate(self._layers):
            if layer.id == layer_id:
                return i
        return -1

    @property
    def selected_layer(self) -> Optional[Layer]:
        if self.selected_id is None:
            return None
        return self.get_layer(self.selected_id)

    @property
    def selected_index(self) -> int:
        """1-based position of the selected layer for "Layer i of n" labels, 0 if none"""
        if self.selected_id is None:
            return 0
        return self.index_of(self.selected_id) + 1

    def layer_at(self, px: float, py: float, order: Optional[List[Layer]] = None) -> Optional[Layer]:
        """Top-most visible layer whose box contains the point

        Args:
            px, py: Canvas pixel position
            order: Paint order to test against (bottom-most first); defaults to
                the sequence order
        """
        candidates = order if order is not None else self._layers
        for layer in reversed(candidates):
            if layer.visible and layer.geometry.contains(px, py):
                return layer
        return None
