from __future__ import annotations
from dataclasses import dataclass, asdict, field
from enum import Enum
import math
from typing import Any, Dict
import numpy as np
from PySide6.QtCore import QSettings
import logging

logger = logging.getLogger(__name__)


class RunMode(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    VERBOSE = "verbose"

    def __str__(self):
        return self.value
    def __repr__(self):
        return self.value


SCALAR_TYPES: Dict[str, type[np.floating]] = {
    "float32": np.float32,
    "float64": np.float64,
}

MAX_ANGLE_SCALE = 4.0 * math.pi

# ----------------------
# Defaults
# ----------------------
DEFAULTS: Dict[str, Any] = {
    "general": {
        "run_mode": RunMode.PRODUCTION.value,
        "logging_level": "INFO",  # "DEBUG", "INFO", "WARNING", "ERROR"
    },
    "trackball": {
        "angle_scale": math.pi,     # radians per unit of drag
        "renormalize": False,
        "scalar_type": "float32",
    },
}

# ---------------------
# Data model
# ---------------------
@dataclass
class GeneralConfig:
    run_mode: RunMode = RunMode.PRODUCTION
    logging_level: str = "INFO"

@dataclass
class TrackballConfig:
    angle_scale: float = math.pi
    renormalize: bool = False
    scalar_type: str = "float32"

@dataclass
class AppSettingsData:
    general: GeneralConfig = field(default_factory=GeneralConfig)
    trackball: TrackballConfig = field(default_factory=TrackballConfig)

# ----------------------
# Utility
# ----------------------
def _truthy(s: str) -> bool:
    return s.strip().lower() in ("1", "true", "yes", "on")


def _validate_run_mode(v: Any) -> RunMode:
    if isinstance(v, RunMode):
        return v
    mode = str(v).strip().lower()
    try:
        return RunMode(mode)
    except ValueError:
        return RunMode(DEFAULTS["general"]["run_mode"])

def _validate_logging_level(v: str) -> str:
    v = str(v).upper()
    return v if v in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"

def _validate_angle_scale(v: Any) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return DEFAULTS["trackball"]["angle_scale"]
    return f if (0 < f <= MAX_ANGLE_SCALE) else DEFAULTS["trackball"]["angle_scale"]

def _validate_renormalize(v: Any) -> bool:
    # QSettings INI backend returns booleans as strings.
    if isinstance(v, bool):
        return v
    return _truthy(str(v))

def _validate_scalar_type(v: Any) -> str:
    name = str(v).strip().lower()
    return name if name in SCALAR_TYPES else DEFAULTS["trackball"]["scalar_type"]


# ---------------------
# AppSettingManager
# ---------------------
class AppSettingsManager:
    """
    Manages the general and trackball settings of the application.

    The in-code DEFAULTS are the base; values stored in QSettings override
    them. Every value is validated on load and out-of-range values fall back
    to the default. The set_* methods persist to QSettings immediately.
    """
    def __init__(self, org_domain: str = "trackview.org", app_name: str = "trackview"):
        self._settings = QSettings(org_domain, app_name)
        self._data = self._load_effective()

    # Read
    @property
    def data(self) -> AppSettingsData:
        return self._data

    @property
    def run_mode(self) -> RunMode:
        return self._data.general.run_mode

    @property
    def dev_mode(self) -> bool:
        return self.run_mode is RunMode.DEVELOPMENT

    @property
    def logging_level(self) -> str:
        return self._data.general.logging_level

    @property
    def angle_scale(self) -> float:
        return self._data.trackball.angle_scale

    @property
    def renormalize(self) -> bool:
        return self._data.trackball.renormalize

    @property
    def scalar_type(self) -> type[np.floating]:
        return SCALAR_TYPES[self._data.trackball.scalar_type]

    # Write
    def set_run_mode(self, v: str | RunMode) -> None:
        mode = _validate_run_mode(v)
        self._settings.setValue("general/run_mode", mode.value)
        self._data.general.run_mode = mode

    def set_logging_level(self, v: str) -> None:
        level = _validate_logging_level(v)
        self._settings.setValue("general/logging_level", level)
        self._data.general.logging_level = level

    def set_angle_scale(self, v: float) -> None:
        scale = _validate_angle_scale(v)
        self._settings.setValue("trackball/angle_scale", scale)
        self._data.trackball.angle_scale = scale

    def set_renormalize(self, v: bool) -> None:
        flag = _validate_renormalize(v)
        self._settings.setValue("trackball/renormalize", flag)
        self._data.trackball.renormalize = flag

    def set_scalar_type(self, v: str) -> None:
        name = _validate_scalar_type(v)
        self._settings.setValue("trackball/scalar_type", name)
        self._data.trackball.scalar_type = name

    # Reset
    def reset_all_to_default(self) -> None:
        """Remove all user settings."""
        self._settings.remove("general")
        self._settings.remove("trackball")
        self._data = self._load_effective()

    def reset_section(self, section: str) -> None:
        """Reset one section to its defaults."""
        if section not in ("general", "trackball"):
            raise ValueError(f"Invalid section: {section}")
        self._settings.remove(section)
        self._data = self._load_effective()

    def to_dict(self) -> dict[str, Any]:
        data = {
            "general": asdict(self._data.general),
            "trackball": asdict(self._data.trackball),
        }
        data["general"]["run_mode"] = self._data.general.run_mode.value
        return data

    # ---------- internals ---------------
    def _load_effective(self) -> AppSettingsData:
        """Apply QSettings overrides on top of DEFAULTS, validate and build the model."""
        merged = self._apply_qsettings_overrides(DEFAULTS)
        return self._make_model_from(merged)

    def _apply_qsettings_overrides(self, base: dict[str, Any]) -> dict[str, Any]:
        """
        Read the dict based settings and apply QSettings overrides.
        :param base:
        :return: apply QSettings overrides
        """
        # general
        g = dict(base.get("general", {}))
        v = self._settings.value("general/run_mode", None)
        if v is not None:
            g["run_mode"] = _validate_run_mode(v).value
        v = self._settings.value("general/logging_level", None)
        if v is not None:
            g["logging_level"] = _validate_logging_level(v)

        # trackball
        tb = dict(base.get("trackball", {}))
        v = self._settings.value("trackball/angle_scale", None)
        if v is not None:
            tb["angle_scale"] = _validate_angle_scale(v)
        v = self._settings.value("trackball/renormalize", None)
        if v is not None:
            tb["renormalize"] = _validate_renormalize(v)
        v = self._settings.value("trackball/scalar_type", None)
        if v is not None:
            tb["scalar_type"] = _validate_scalar_type(v)

        return {"general": g, "trackball": tb}

    def _make_model_from(self, merged: dict[str, Any]) -> AppSettingsData:
        """
        making model from merged dict and returning merged AppSettingsData
        :param merged:
        :return: merged AppSettingsData
        """
        g = merged.get("general", {})
        tb = merged.get("trackball", {})
        return AppSettingsData(
            general=GeneralConfig(
                run_mode=_validate_run_mode(g.get("run_mode", DEFAULTS["general"]["run_mode"])),
                logging_level=_validate_logging_level(g.get("logging_level", DEFAULTS["general"]["logging_level"])),
            ),
            trackball=TrackballConfig(
                angle_scale=_validate_angle_scale(tb.get("angle_scale", DEFAULTS["trackball"]["angle_scale"])),
                renormalize=_validate_renormalize(tb.get("renormalize", DEFAULTS["trackball"]["renormalize"])),
                scalar_type=_validate_scalar_type(tb.get("scalar_type", DEFAULTS["trackball"]["scalar_type"])),
            ),
        )
