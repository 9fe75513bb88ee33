"""
Layer Aligner - Editor Settings

User preferences persisted in the config file. Layer state is never persisted.
"""

from dataclasses import dataclass, field, asdict, fields
from typing import Any, Dict

from layer_aligner.constants import (
    DEFAULT_BG_COLOR,
    ALIGN_MIN_SPAN, ALIGN_GAP_FRACTION, ALIGN_GAP_CAP, ALIGN_RATIO_TOLERANCE,
)


def _known_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


@dataclass
class AlignmentThresholds:
    """Tunable constants of the alignment solver

    Attributes:
        min_span: Normalized spans below this are degenerate (layer skipped /
            consistency check skipped)
        gap_fraction: Body-bottom gap tolerance factor
        gap_cap: Cap (pixels) on the reference body span used for the tolerance
        ratio_tolerance: Max face/body ratio difference against the reference
    """
    min_span: float = ALIGN_MIN_SPAN
    gap_fraction: float = ALIGN_GAP_FRACTION
    gap_cap: float = ALIGN_GAP_CAP
    ratio_tolerance: float = ALIGN_RATIO_TOLERANCE

    def gap_tolerance(self, ref_body_span: float) -> float:
        return self.gap_fraction * min(ref_body_span, self.gap_cap)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AlignmentThresholds':
        return cls(**{k: float(v) for k, v in _known_fields(cls, data).items()})


@dataclass
class EditorSettings:
    """Display and interaction preferences"""
    background_color: str = DEFAULT_BG_COLOR
    opacity_selected: float = 1.0
    opacity_unselected: float = 1.0
    show_borders: bool = True
    show_guides: bool = True
    guides_locked: bool = False
    snap_to_layer_centers: bool = True
    alignment: AlignmentThresholds = field(default_factory=AlignmentThresholds)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EditorSettings':
        """Build from saved config, ignoring unknown keys and defaulting missing ones"""
        values = _known_fields(cls, data)
        if isinstance(values.get('alignment'), dict):
            values['alignment'] = AlignmentThresholds.from_dict(values['alignment'])
        else:
            values.pop('alignment', None)
        return cls(**values)
