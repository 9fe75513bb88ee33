"""Snapping helpers shared by guide dragging and the opacity sliders."""

import numpy as np

from layer_aligner.constants import OPACITY_BASE_SNAP_POINTS


def snap_to_nearest(value, snaps):
	"""Return the snap point closest to value (value itself when there are none).

	Ties resolve to the smallest snap point.
	"""
	if len(snaps) == 0:
		return value
	points = np.sort(np.asarray(snaps, dtype=float))
	return float(points[np.argmin(np.abs(points - value))])


def snap_within(value, snaps, threshold):
	"""Snap only when the nearest snap point is strictly closer than threshold"""
	snapped = snap_to_nearest(value, snaps)
	if abs(value - snapped) < threshold:
		return snapped
	return value


def opacity_snap_points(layer_count):
	"""Sorted, de-duplicated opacity snap points including 1/N for N layers"""
	points = set(OPACITY_BASE_SNAP_POINTS)
	if layer_count > 0:
		points.add(1 / layer_count)
	return sorted(points)


def snap_opacity(value, layer_count):
	"""Snap a released opacity slider value to the nearest snap point"""
	return snap_to_nearest(value, opacity_snap_points(layer_count))
