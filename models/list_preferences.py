"""
List Preferences - Pydantic model for the process-wide list settings.

Stored as a flat key-value mapping of strings (the same shape a browser's
local storage would hold) so the file stays readable and forgiving.
"""

import math
from typing import Mapping

from pydantic import BaseModel, Field


DEFAULT_MARGIN_PCT = 15.0

SHOPPING_MODE_KEY = "shopping_mode"
MARGIN_KEY = "margin_pct"


class ListPreferences(BaseModel):
    """Shopping-mode flag and budget margin."""
    shopping_mode: bool = Field(default=False, description="True while at the store")
    margin_pct: float = Field(default=DEFAULT_MARGIN_PCT, description="Markup applied to the base total")

    @classmethod
    def from_kv(cls, data: Mapping[str, str], default_margin: float = DEFAULT_MARGIN_PCT) -> "ListPreferences":
        """Parse string-encoded values, with defaults for missing or bad ones."""
        shopping_mode = str(data.get(SHOPPING_MODE_KEY, "")).strip().lower() == "true"

        margin = default_margin
        raw_margin = data.get(MARGIN_KEY)
        if raw_margin is not None:
            try:
                parsed = float(str(raw_margin).strip())
                if math.isfinite(parsed):
                    margin = parsed
            except ValueError:
                pass

        return cls(shopping_mode=shopping_mode, margin_pct=margin)

    def to_kv(self) -> dict[str, str]:
        """Serialize to string-encoded key-value pairs."""
        return {
            SHOPPING_MODE_KEY: "true" if self.shopping_mode else "false",
            MARGIN_KEY: repr(float(self.margin_pct)),
        }
