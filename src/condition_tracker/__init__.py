"""
Condition Tracker - tracks condition instances on tabletop tokens, built with FastMCP.
"""

from .main import mcp
from .models import *
from .storage import StateStorage
from .tracker import ConditionTracker

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("condition-tracker")
except Exception:
    __version__ = "1.3.0"  # Fallback if metadata unavailable
__all__ = ["mcp", "StateStorage", "ConditionTracker"]
