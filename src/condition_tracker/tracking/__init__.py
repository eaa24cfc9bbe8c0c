"""
Condition instance tracking on tokens.

Provides the marker/tooltip codecs and the engine that applies
add/remove/set/toggle commands to both fields in one pass.
"""

from .codecs import MarkerCodec, TooltipCodec, expand_counts
from .engine import (
    MARKER_FIELD,
    TOOLTIP_FIELD,
    InstanceUpdateEngine,
    TokenUpdate,
    calculate_delta,
    compute_counts,
)

__all__ = [
    "MarkerCodec",
    "TooltipCodec",
    "expand_counts",
    "InstanceUpdateEngine",
    "TokenUpdate",
    "calculate_delta",
    "compute_counts",
    "MARKER_FIELD",
    "TOOLTIP_FIELD",
]
