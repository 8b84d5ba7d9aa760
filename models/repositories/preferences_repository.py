"""
Preferences Repository - persists list preferences to a local key-value file.

The file is a JSON object of strings. Reads never fail: a missing or corrupt
file yields defaults.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from models.list_preferences import ListPreferences, DEFAULT_MARGIN_PCT

logger = logging.getLogger(__name__)


class PreferencesRepository:
    """Repository for the shopping-mode flag and margin."""

    def __init__(self, path: str | Path, default_margin: float = DEFAULT_MARGIN_PCT):
        self.path = Path(path)
        self.default_margin = default_margin

    def get(self) -> ListPreferences:
        """Load preferences, returning defaults if the file is missing or unreadable."""
        if not self.path.exists():
            return ListPreferences(margin_pct=self.default_margin)

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read preferences at {self.path}: {e}")
            return ListPreferences(margin_pct=self.default_margin)

        if not isinstance(data, dict):
            logger.warning(f"Preferences at {self.path} are not a key-value object; using defaults")
            return ListPreferences(margin_pct=self.default_margin)

        return ListPreferences.from_kv(data, default_margin=self.default_margin)

    def save(self, preferences: ListPreferences) -> None:
        """Write preferences atomically (temp file + replace)."""
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".prefs_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(preferences.to_kv(), tmp, indent=2)
            os.replace(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
