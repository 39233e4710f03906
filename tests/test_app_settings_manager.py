import math
from pathlib import Path

import numpy as np
import pytest
from PySide6.QtCore import QSettings

from trackview.app.app_settings_manager import AppSettingsManager, RunMode

ORG = "trackview-tests.org"
APP = "trackview"


@pytest.fixture
def tmp_settings(tmp_path: Path):
    """Point QSettings at an INI file in a temporary folder so tests do not leak."""
    QSettings.setDefaultFormat(QSettings.IniFormat)
    QSettings.setPath(QSettings.IniFormat, QSettings.UserScope, str(tmp_path))
    s = QSettings(ORG, APP)
    s.clear()
    yield s
    s.clear()


def test_defaults(tmp_settings):
    mgr = AppSettingsManager(ORG, APP)

    assert mgr.run_mode is RunMode.PRODUCTION
    assert not mgr.dev_mode
    assert mgr.logging_level == "INFO"
    assert mgr.angle_scale == math.pi
    assert mgr.renormalize is False
    assert mgr.scalar_type is np.float32


def test_setters_persist(tmp_settings):
    mgr = AppSettingsManager(ORG, APP)
    mgr.set_run_mode("development")
    mgr.set_logging_level("debug")
    mgr.set_angle_scale(1.5)
    mgr.set_renormalize(True)
    mgr.set_scalar_type("float64")

    reloaded = AppSettingsManager(ORG, APP)

    assert reloaded.run_mode is RunMode.DEVELOPMENT
    assert reloaded.dev_mode
    assert reloaded.logging_level == "DEBUG"
    assert reloaded.angle_scale == 1.5
    assert reloaded.renormalize is True
    assert reloaded.scalar_type is np.float64


@pytest.mark.parametrize("key, value", [
    ("general/run_mode", "nonsense"),
    ("general/logging_level", "LOUD"),
    ("trackball/angle_scale", "-1"),
    ("trackball/angle_scale", "100"),
    ("trackball/angle_scale", "abc"),
    ("trackball/scalar_type", "float16"),
])
def test_invalid_stored_values_fall_back_to_defaults(tmp_settings, key, value):
    tmp_settings.setValue(key, value)
    tmp_settings.sync()

    mgr = AppSettingsManager(ORG, APP)

    assert mgr.run_mode is RunMode.PRODUCTION
    assert mgr.logging_level == "INFO"
    assert mgr.angle_scale == math.pi
    assert mgr.scalar_type is np.float32


def test_reset_section(tmp_settings):
    mgr = AppSettingsManager(ORG, APP)
    mgr.set_angle_scale(2.0)
    mgr.set_logging_level("ERROR")

    mgr.reset_section("trackball")

    assert mgr.angle_scale == math.pi
    assert mgr.logging_level == "ERROR"
    with pytest.raises(ValueError):
        mgr.reset_section("view")


def test_reset_all_to_default(tmp_settings):
    mgr = AppSettingsManager(ORG, APP)
    mgr.set_renormalize(True)
    mgr.set_run_mode(RunMode.VERBOSE)

    mgr.reset_all_to_default()

    assert mgr.renormalize is False
    assert mgr.run_mode is RunMode.PRODUCTION


def test_to_dict(tmp_settings):
    data = AppSettingsManager(ORG, APP).to_dict()

    assert data["general"]["run_mode"] == "production"
    assert data["trackball"] == {"angle_scale": math.pi, "renormalize": False, "scalar_type": "float32"}
