"""
Layer Aligner - Canvas Interaction Components

- handles.py: ABC-based resize handles (EdgeHandle, CornerHandle)
- drag_context.py: Immutable gesture states (Idle, DraggingLayer, ...)
- controller.py: Pointer state machine driving the layer store
"""

from .handles import Handle, EdgeHandle, CornerHandle, HANDLES, create_handle, get_handle_at_pos
from .drag_context import IDLE, Idle, DraggingLayer, ResizingLayer, DraggingGuide
from .controller import InteractionController

__all__ = [
    'Handle', 'EdgeHandle', 'CornerHandle', 'HANDLES', 'create_handle', 'get_handle_at_pos',
    'IDLE', 'Idle', 'DraggingLayer', 'ResizingLayer', 'DraggingGuide',
    'InteractionController',
]
