"""
Central Configuration
All tunable constants for the flow field in one place
"""

import json
import os
from dataclasses import asdict, dataclass, fields, replace as dc_replace
from typing import Any, Dict, Optional, Tuple

from flowlines.utils.logger import logger

# === LINE APPEARANCE ===
LINE_COLOR = (156, 163, 175)  # Very light grey
LINE_OPACITY = 0.25
LINE_WIDTH = 1.0

# === NOISE DRIFT ===
WAVE_SPEED_X = 0.008
WAVE_SPEED_Y = 0.005
WAVE_AMP_X = 20.0
WAVE_AMP_Y = 15.0
NOISE_FREQUENCY = 0.001
NOISE_ANGLE_SCALE = 8.0  # Noise value -> drift angle (radians)

# === AMBIENT WAVE ===
AMBIENT_WAVE_INTENSITY = 0.8
AMBIENT_WAVE_SPEED = 0.001
AMBIENT_WAVE_FREQUENCY = 0.005

# === CURSOR SPRING ===
FRICTION = 0.94
TENSION = 0.003
MAX_CURSOR_MOVE = 60.0
MIN_INTERACTION_RADIUS = 120.0
CURSOR_FALLOFF_FREQUENCY = 0.005
CURSOR_FORCE = 0.0003

# === POINTER ===
POINTER_SMOOTHING = 0.06
MAX_POINTER_SPEED = 60.0
POINTER_START = (-10.0, 0.0)  # Off-surface until the first input event

# === GRID ===
X_GAP = 16.0
Y_GAP = 40.0
GRID_PADDING_X = 100.0
GRID_PADDING_Y = 50.0

# === TIMING ===
FRAME_INTERVAL_MS = 33    # Minimum time between drawn frames (~30fps)
REFRESH_INTERVAL_MS = 16  # Host refresh cadence the loop re-arms at (~60Hz)

DEFAULT_CONFIG_PATH = "config/flowlines.json"


@dataclass(frozen=True)
class FlowConfig:
    """
    Immutable set of tunables for one animated background.

    Supplied once at construction, never mutated afterwards. Use
    replace() to derive a variant.
    """

    line_color: Tuple[int, int, int] = LINE_COLOR
    line_opacity: float = LINE_OPACITY
    line_width: float = LINE_WIDTH

    wave_speed_x: float = WAVE_SPEED_X
    wave_speed_y: float = WAVE_SPEED_Y
    wave_amp_x: float = WAVE_AMP_X
    wave_amp_y: float = WAVE_AMP_Y
    noise_frequency: float = NOISE_FREQUENCY
    noise_angle_scale: float = NOISE_ANGLE_SCALE

    ambient_wave_intensity: float = AMBIENT_WAVE_INTENSITY
    ambient_wave_speed: float = AMBIENT_WAVE_SPEED
    ambient_wave_frequency: float = AMBIENT_WAVE_FREQUENCY

    friction: float = FRICTION
    tension: float = TENSION
    max_cursor_move: float = MAX_CURSOR_MOVE
    min_interaction_radius: float = MIN_INTERACTION_RADIUS
    cursor_falloff_frequency: float = CURSOR_FALLOFF_FREQUENCY
    cursor_force: float = CURSOR_FORCE

    pointer_smoothing: float = POINTER_SMOOTHING
    max_pointer_speed: float = MAX_POINTER_SPEED

    x_gap: float = X_GAP
    y_gap: float = Y_GAP
    padding_x: float = GRID_PADDING_X
    padding_y: float = GRID_PADDING_Y

    frame_interval_ms: int = FRAME_INTERVAL_MS
    refresh_interval_ms: int = REFRESH_INTERVAL_MS

    # None = random seed per engine
    seed: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-friendly dict."""
        data = asdict(self)
        data["line_color"] = list(self.line_color)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlowConfig":
        """
        Build a config from a dict, starting from defaults.

        Unknown keys are ignored (with a warning) so older or newer
        config files still load.
        """
        known = {f.name: f for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.config(f"Ignoring unknown config key '{key}'")
                continue
            values[key] = _coerce(key, value, getattr(cls, key))
        return cls(**values)

    def replace(self, **changes) -> "FlowConfig":
        """Return a copy with the given fields changed."""
        return dc_replace(self, **changes)


def _coerce(key: str, value: Any, default: Any) -> Any:
    if key == "line_color":
        r, g, b = (int(c) for c in value)
        return (r, g, b)
    if key == "seed":
        return None if value is None else float(value)
    if isinstance(default, int):
        return int(value)
    return float(value)


def load_config(path: Optional[str] = None) -> FlowConfig:
    """
    Load a FlowConfig from a JSON file.

    Returns defaults if the file is missing or cannot be parsed.
    """
    config_path = path or DEFAULT_CONFIG_PATH
    if not os.path.exists(config_path):
        return FlowConfig()
    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("top level must be an object")
        return FlowConfig.from_dict(data)
    except (json.JSONDecodeError, IOError, TypeError, ValueError) as e:
        logger.config(f"Failed to load config from {config_path}, using defaults", details=str(e))
        return FlowConfig()
