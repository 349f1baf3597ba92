"""Site state persistence.

Keeps the last applied :class:`SiteState` of every bucket in one JSON
file, the way a provisioning tool keeps its state file.
"""
import os
from typing import Dict, Optional

from ...errors import ConfigurationError
from ...models.site_state import SiteState
from .file_utils import load_json, save_json


class StateStore:
    """Load and save site states keyed by bucket.

    Args:
        state_file: Path to the JSON state file
    """

    def __init__(self, state_file: str):
        self.state_file = state_file

    def _load_resources(self) -> Dict[str, dict]:
        data = load_json(self.state_file)
        if data is None:
            if os.path.exists(self.state_file):
                raise ConfigurationError(f"State file {self.state_file} is unreadable")
            return {}
        if not isinstance(data, dict) or not isinstance(data.get("resources", {}), dict):
            raise ConfigurationError(f"State file {self.state_file} is malformed")
        return data.get("resources", {})

    def get(self, bucket: str) -> Optional[SiteState]:
        """Return the recorded state of *bucket*, or None."""
        record = self._load_resources().get(bucket)
        return SiteState.from_dict(record) if record else None

    def put(self, state: SiteState) -> None:
        """Record *state* under its bucket."""
        resources = self._load_resources()
        resources[state.bucket] = state.to_dict()
        self._save(resources)

    def remove(self, bucket: str) -> bool:
        """Forget *bucket*. Returns True if it was recorded."""
        resources = self._load_resources()
        if resources.pop(bucket, None) is None:
            return False
        self._save(resources)
        return True

    def buckets(self):
        return sorted(self._load_resources())

    def _save(self, resources):
        if not save_json(self.state_file, {"resources": resources}, compact=False):
            raise ConfigurationError(f"Cannot write state file {self.state_file}")
