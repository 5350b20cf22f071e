"""Tests for interpreter configuration."""

import pytest

from matcalc.config import Config
from matcalc.matrix import DEFAULT_PRECISION, PIVOT_TOLERANCE


def test_defaults():
    config = Config()
    assert config.precision == DEFAULT_PRECISION == 12
    assert config.pivot_tolerance == PIVOT_TOLERANCE == 1e-10
    assert config.debug is False


def test_from_empty_environment_uses_defaults():
    assert Config.from_env({}) == Config()


def test_from_env_reads_overrides():
    config = Config.from_env({
        "MATCALC_PRECISION": "6",
        "MATCALC_PIVOT_TOLERANCE": "1e-8",
        "MATCALC_DEBUG": "1",
    })
    assert config == Config(precision=6, pivot_tolerance=1e-8, debug=True)


def test_empty_debug_value_leaves_debugging_off():
    assert Config.from_env({"MATCALC_DEBUG": ""}).debug is False


@pytest.mark.parametrize("environ", [
    {"MATCALC_PRECISION": "twelve"},
    {"MATCALC_PRECISION": "0"},
    {"MATCALC_PIVOT_TOLERANCE": "-1"},
    {"MATCALC_PIVOT_TOLERANCE": "tiny"},
])
def test_invalid_values_raise(environ):
    with pytest.raises(ValueError):
        Config.from_env(environ)


def test_config_is_frozen():
    with pytest.raises(AttributeError):
        Config().precision = 3
