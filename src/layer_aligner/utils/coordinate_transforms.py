"""Coordinate transformation utilities for layer geometry.

Provides conversion between:
- Normalized image space (0-1 on both axes, within the layer's own image)
- Canvas pixels (top-left origin, same space as layer geometry)

Images are shown with "contain" fit: the image keeps its aspect ratio inside the
layer box and the spare room on one axis is split evenly on both sides.
"""


def contain_rect(layer):
	"""Rectangle actually covered by the image inside the layer box.

	Args:
		layer: Anything with x, y, width, height and aspect_ratio

	Returns:
		(left, top, img_w, img_h): Canvas position and size of the visible image
	"""
	ratio = layer.aspect_ratio
	box_ratio = layer.width / layer.height
	if box_ratio > ratio:
		# Box wider than the image: empty bands left and right
		img_w = layer.height * ratio
		return layer.x + (layer.width - img_w) / 2, layer.y, img_w, layer.height
	# Box taller (or equal): empty bands top and bottom
	img_h = layer.width / ratio
	return layer.x, layer.y + (layer.height - img_h) / 2, layer.width, img_h


def to_canvas(layer, u, v):
	"""Map a normalized image point to canvas pixels.

	Args:
		layer: Anything with x, y, width, height and aspect_ratio
		u: Horizontal image position (0 = left edge, 1 = right edge)
		v: Vertical image position (0 = top edge, 1 = bottom edge)

	Returns:
		(x, y): Canvas pixel coordinates
	"""
	left, top, img_w, img_h = contain_rect(layer)
	return left + u * img_w, top + v * img_h


def from_canvas(layer, x, y):
	"""Inverse of to_canvas: canvas pixels -> normalized image point (unclamped).

	Args:
		layer: Anything with x, y, width, height and aspect_ratio
		x, y: Canvas pixel coordinates

	Returns:
		(u, v): Normalized image coordinates
	"""
	left, top, img_w, img_h = contain_rect(layer)
	return (x - left) / img_w, (y - top) / img_h


def clamp01(value):
	"""Clamp to the closed unit interval"""
	return max(0.0, min(1.0, value))
