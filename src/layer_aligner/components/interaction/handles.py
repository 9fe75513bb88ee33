"""Resize handle system - ABC-based handle architecture.

Each handle type is a class that knows:
- Where it sits on a layer box
- How to test if a pointer position hits it
- How to turn a pointer delta into new layer geometry

Drag math always starts from the geometry captured at gesture start, so calling
drag() again for every pointer move never accumulates error.
"""

from abc import ABC, abstractmethod

from layer_aligner.constants import HANDLE_SIZE, MIN_LAYER_SIZE, RESIZE_HANDLES
from layer_aligner.models.transform import Geometry


class Handle(ABC):
    """Abstract base class for resize handles."""
    
    def __init__(self, name, handle_size=HANDLE_SIZE):
        """
        Args:
            name: Compass name ('n', 'se', ...)
            handle_size: Side of the square hit region in pixels
        """
        self.name = name
        self.handle_size = handle_size
        
        # Abstract position on the box (0 = left/top, 0.5 = middle, 1 = right/bottom)
        self.norm_x = 1.0 if 'e' in name else 0.0 if 'w' in name else 0.5
        self.norm_y = 0.0 if 'n' in name else 1.0 if 's' in name else 0.5
    
    def get_pixel_pos(self, geometry):
        """Centre of the handle in canvas pixels."""
        return (geometry.x + self.norm_x * geometry.width,
                geometry.y + self.norm_y * geometry.height)
    
    def hit_test(self, px, py, geometry):
        """Test if a pointer position lies inside this handle's square."""
        hx, hy = self.get_pixel_pos(geometry)
        half = self.handle_size / 2
        return abs(px - hx) <= half and abs(py - hy) <= half
    
    @abstractmethod
    def drag(self, dx, dy, start_geometry, aspect_ratio, min_size=MIN_LAYER_SIZE):
        """Compute the resized geometry.
        
        Args:
            dx, dy: Pointer movement since gesture start (pixels)
            start_geometry: Geometry captured at gesture start
            aspect_ratio: Layer's intrinsic width / height
            min_size: Floor for width and height
            
        Returns:
            Geometry: New layer geometry
        """
        pass
    
    def _edge_resize(self, dx, dy, start, min_size):
        """Resize the dimensions named by this handle, keeping the opposite edges fixed."""
        x, y, width, height = start.x, start.y, start.width, start.height
        
        if 'e' in self.name:
            width = max(min_size, start.width + dx)
        if 'w' in self.name:
            width = max(min_size, start.width - dx)
            x = start.x + start.width - width
        if 's' in self.name:
            height = max(min_size, start.height + dy)
        if 'n' in self.name:
            height = max(min_size, start.height - dy)
            y = start.y + start.height - height
        
        return Geometry(x, y, width, height)
    
    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class EdgeHandle(Handle):
    """Edge handle for single-axis resizing (n, s, e, w)."""
    
    def drag(self, dx, dy, start_geometry, aspect_ratio, min_size=MIN_LAYER_SIZE):
        """Only one dimension changes; aspect ratio is not preserved."""
        return self._edge_resize(dx, dy, start_geometry, min_size)


class CornerHandle(Handle):
    """Corner handle for aspect-locked resizing (nw, ne, sw, se)."""
    
    def drag(self, dx, dy, start_geometry, aspect_ratio, min_size=MIN_LAYER_SIZE):
        """Width follows the pointer, height follows the aspect ratio.
        
        The box pivots on the anchor (opposite) corner.
        """
        resized = self._edge_resize(dx, dy, start_geometry, min_size)
        
        # Keep both sides above the floor without breaking the ratio
        width = max(resized.width, min_size, min_size * aspect_ratio)
        height = width / aspect_ratio
        
        x, y = start_geometry.x, start_geometry.y
        if 'w' in self.name:
            x = start_geometry.x + start_geometry.width - width
        if 'n' in self.name:
            y = start_geometry.y + start_geometry.height - height
        
        return Geometry(x, y, width, height)


def create_handle(name):
    """Factory: handle object for a compass name."""
    if name not in RESIZE_HANDLES:
        raise ValueError(f"Unknown resize handle: {name}")
    if len(name) == 2:
        return CornerHandle(name)
    return EdgeHandle(name)


# Corners first so they win where they overlap edge handles on small boxes
HANDLES = {name: create_handle(name) for name in ('nw', 'ne', 'sw', 'se', 'n', 's', 'e', 'w')}


def get_handle_at_pos(px, py, geometry):
    """Find which handle (if any) is at the pointer position.
    
    Returns:
        Handle object or None
    """
    for handle in HANDLES.values():
        if handle.hit_test(px, py, geometry):
            return handle
    return None
