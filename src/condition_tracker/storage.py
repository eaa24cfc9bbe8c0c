"""
Storage layer for the condition tracker.
Persists tracker state and the campaign host objects as JSON files.
"""

import logging
import tempfile
from pathlib import Path

from pydantic import BaseModel, ValidationError as PydanticValidationError

from .errors import StorageError
from .host import Campaign
from .models import TrackerState

logger = logging.getLogger(__name__)

STATE_FILE = "state.json"
CAMPAIGN_FILE = "campaign.json"


class StateStorage:
    """Reads and writes tracker state and campaign data under one directory."""

    def __init__(self, data_dir: str | Path = "ct_data"):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Initializing StateStorage with data_dir: %s", self.data_dir.resolve())

    @property
    def state_path(self) -> Path:
        return self.data_dir / STATE_FILE

    @property
    def campaign_path(self) -> Path:
        return self.data_dir / CAMPAIGN_FILE

    def load_state(self) -> TrackerState | None:
        """Stored tracker state, or None on first run.

        Raises:
            StorageError: If the state file exists but cannot be read.
        """
        return self._load(self.state_path, TrackerState)

    def save_state(self, state: TrackerState) -> Path:
        return self._write(self.state_path, state)

    def load_campaign(self) -> Campaign:
        """Stored campaign, or an empty one on first run."""
        campaign = self._load(self.campaign_path, Campaign)
        return campaign if campaign is not None else Campaign()

    def save_campaign(self, campaign: Campaign) -> Path:
        return self._write(self.campaign_path, campaign)

    def _load(self, path: Path, model: type[BaseModel]):
        if not path.exists():
            return None
        try:
            return model.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, PydanticValidationError) as e:
            raise StorageError(f"Cannot read {path.name}: {e}", details={"path": str(path)}) from e

    def _write(self, path: Path, data: BaseModel) -> Path:
        # Atomic write: temp file in same dir, then rename
        fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, suffix=".json.tmp", prefix=".ct_")
        try:
            with open(fd, "w", encoding="utf-8") as f:
                f.write(data.model_dump_json(indent=2))
            Path(tmp_path).replace(path)
        except Exception:
            Path(tmp_path).unlink(missing_ok=True)
            raise
        logger.debug("Saved %s", path)
        return path
