"""
Layer Aligner - Layer Operations Service

Pure layer placement logic independent of the UI:
- Creating layers for a batch of imported images
- Initial layout once the canvas size is known
- Geometry correction once an image has been decoded
- Paint order (selection / wizard layer forced on top)
"""

from dataclasses import replace
from typing import List, Optional, Sequence

from layer_aligner.constants import LAYOUT_HEIGHT_FRACTION, MIN_LAYOUT_BOUNDS
from layer_aligner.models.layer import Layer
from layer_aligner.models.transform import CanvasBounds


def create_layers_from_images(images: Sequence) -> List[Layer]:
    """Create one placeholder layer per image, staggered by batch position

    Args:
        images: Opaque image handles (file paths for the Qt shell and CLI)

    Returns:
        New Layer objects with fresh ids and a provisional aspect ratio of 1
    """
    return [Layer.create(image, index=i) for i, image in enumerate(images)]


def layout_new_layers(bounds: Optional[CanvasBounds], layers: Sequence[Layer]) -> List[Layer]:
    """Place every layer at LAYOUT_HEIGHT_FRACTION of the canvas height, centred

    Width follows each layer's aspect ratio. Layers are returned unchanged (as
    copies) when the bounds are unknown or smaller than MIN_LAYOUT_BOUNDS.

    Args:
        bounds: Canvas size, or None when the surface has not been measured yet
        layers: Current ordered layers

    Returns:
        New list of new Layer objects; the inputs are not modified
    """
    if bounds is None or bounds.width < MIN_LAYOUT_BOUNDS or bounds.height < MIN_LAYOUT_BOUNDS:
        return [replace(layer) for layer in layers]

    target_height = bounds.height * LAYOUT_HEIGHT_FRACTION
    laid_out = []
    for layer in layers:
        width = target_height * layer.aspect_ratio
        laid_out.append(replace(
            layer,
            x=(bounds.width - width) / 2,
            y=(bounds.height - target_height) / 2,
            width=width,
            height=target_height,
        ))
    return laid_out


def decoded_layer(layer: Layer, intrinsic_width: float, intrinsic_height: float,
                  bounds: Optional[CanvasBounds] = None) -> Layer:
    """Layer corrected for the real image size

    Keeps the current height, derives the width from the intrinsic aspect ratio and
    re-centres in the canvas when its bounds are known (otherwise keeps x/y).
    """
    aspect_ratio = intrinsic_width / intrinsic_height
    width = layer.height * aspect_ratio
    x, y = layer.x, layer.y
    if bounds is not None:
        x = (bounds.width - width) / 2
        y = (bounds.height - layer.height) / 2
    return replace(layer, aspect_ratio=aspect_ratio, width=width, x=x, y=y)


def paint_order(layers: Sequence[Layer], selected_id: Optional[str] = None,
                wizard_layer_id: Optional[str] = None) -> List[Layer]:
    """Layers bottom-to-top as they should be painted

    Sequence order is paint order, except that the layer being marked by the
    wizard is drawn on top; outside the wizard the selected layer is.
    """
    top_id = wizard_layer_id if wizard_layer_id is not None else selected_id
    ordered = [layer for layer in layers if layer.id != top_id]
    ordered.extend(layer for layer in layers if layer.id == top_id)
    return ordered
