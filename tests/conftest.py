"""
Pytest configuration and fixtures for condition-tracker tests.
"""

import sys
from pathlib import Path
import pytest

# Add src directory to Python path to allow importing condition_tracker
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from condition_tracker.host import Campaign, Token
from condition_tracker.models import ConditionDefinition, MarkerDefinition, TrackerState


@pytest.fixture
def state() -> TrackerState:
    """Small catalog: two conditions share the blue marker, one has none."""
    return TrackerState(
        conditions=[
            ConditionDefinition(name="Blinded", marker_ref="blue", description=["Can't see."]),
            ConditionDefinition(name="Deafened", marker_ref="blue"),
            ConditionDefinition(
                name="Exhaustion",
                marker_ref="yellow",
                description=["Level 1: Disadvantage on ability checks", "Level 2: Speed halved"],
            ),
            ConditionDefinition(name="Hexed", marker_ref="Hex::1234"),
            ConditionDefinition(name="Prone"),
        ]
    )


@pytest.fixture
def campaign() -> Campaign:
    return Campaign(markers=[MarkerDefinition(name="Hex", tag="Hex::1234", image_ref="https://example.test/hex.png")])


@pytest.fixture
def token() -> Token:
    return Token(name="Goblin")
