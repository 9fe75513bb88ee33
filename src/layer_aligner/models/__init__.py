"""
Layer Aligner - Data Models

This module contains the data model classes for the layer canvas.
This is the MODEL in MVC architecture.

Public API: Import Layer, ReferencePoints, LayerStore from models
"""

from .transform import Vec2, Geometry, CanvasBounds
from .layer import Layer, ReferencePoints, refs_of
from .guides import GuideLines
from .settings import EditorSettings, AlignmentThresholds
from .layer_store import LayerStore

__all__ = [
    'Vec2', 'Geometry', 'CanvasBounds',
    'Layer', 'ReferencePoints', 'refs_of',
    'GuideLines',
    'EditorSettings', 'AlignmentThresholds',
    'LayerStore',
]
