"""
Tests for viewer settings resolution.
"""

import pytest

from pathviz.app.config import Settings, ConfigError, resolve_settings


def test_defaults():
    s = resolve_settings([], environ={})
    assert s == Settings()
    assert (s.rows, s.cols) == (20, 50)
    assert (s.start, s.finish) == ((10, 15), (10, 35))


def test_environment_overrides():
    s = resolve_settings([], environ={"PATHVIZ_ROWS": "8", "PATHVIZ_START": "2, 3"})
    assert s.rows == 8
    assert s.start == (2, 3)
    assert s.cols == 50


def test_flags_beat_environment():
    s = resolve_settings(["--rows=12", "--finish=4,7", "--verbose"],
                         environ={"PATHVIZ_ROWS": "8"})
    assert s.rows == 12
    assert s.finish == (4, 7)
    assert s.verbose


@pytest.mark.parametrize("arg,expected", [
    ("--verbose", True),
    ("--verbose=1", True),
    ("--verbose=true", True),
    ("--verbose=0", False),
    ("--verbose=off", False),
])
def test_verbose_forms(arg, expected):
    assert resolve_settings([arg], environ={}).verbose is expected


@pytest.mark.parametrize("argv", [
    ["--verbose=maybe"],
    ["12"],
    ["--rows=12", "extra"],
    ["--rows=abc"],
    ["--rows=0"],
    ["--start=1"],
    ["--finish=-1,2"],
    ["--cell-size=2"],
    ["--cols"],
    ["--speed=3"],
])
def test_invalid_values(argv):
    with pytest.raises(ConfigError):
        resolve_settings(argv, environ={})


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)
