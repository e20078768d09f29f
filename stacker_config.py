
"""Field configuration, feel settings and coach settings"""
import os
from dataclasses import dataclass

DEFAULT_WIDTH, DEFAULT_HEIGHT = 10, 20
DEFAULT_SPEED_MS = 500

# (min, max, step) for every reconfigurable field
LIMITS = {
    "width": (6, 20, 1),
    "height": (10, 40, 1),
    "base_speed": (100, 1000, 50),
}

CONFIG = {
    "CELL_SIZE": 28,
    "DAS_MS": 170,
    "ARR_MS": 30,
    "SOFT_DROP_MS": 40,
    "COACH_MODEL": os.environ.get("COACH_MODEL", "gemini-3-flash-preview"),
    "COACH_TIMEOUT_MS": int(os.environ.get("COACH_TIMEOUT_MS", "8000")),
}


def coach_api_key():
    return os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")


def clamp(name: str, value) -> int:
    """Pin value into range, snapped to the nearest step."""
    lo, hi, step = LIMITS[name]
    value = max(lo, min(hi, int(value)))
    return lo + (value - lo + step // 2) // step * step


@dataclass(frozen=True)
class FieldConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    base_speed: int = DEFAULT_SPEED_MS

    def clamped(self) -> "FieldConfig":
        return FieldConfig(
            clamp("width", self.width),
            clamp("height", self.height),
            clamp("base_speed", self.base_speed),
        )
