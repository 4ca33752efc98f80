"""
Tests for antenna parameters and render configuration.
"""
import dataclasses
import os
import sys

# Add the src directory to the path if not already installed
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import pytest
from radiation_pattern import (AntennaParameters, AntennaVariant, RenderConfig, ViewMode,
                               parse_parameters)
from radiation_pattern.config import parse_director_count, parse_phase, parse_positive


def test_default_parameters():
    params = AntennaParameters()
    assert params.dipole_length == 0.5
    assert params.monopole_length == 0.25
    assert params.separation == 0.5
    assert params.phase_offset == 0.0
    assert params.director_count == 3


def test_default_render_config():
    config = RenderConfig()
    assert config.variant is AntennaVariant.DIPOLE
    assert config.view_mode is ViewMode.GAIN


@pytest.mark.parametrize('raw, expected', [
    ('5', 5),
    (4, 4),
    (4.7, 4),
    ('4.7', 4),
    (0, 0),
    ('0', 0),
    (-2, 0),
    ('abc', 3),
    ('', 3),
    (None, 3),
])
def test_parse_director_count(raw, expected):
    assert parse_director_count(raw) == expected


def test_parse_positive():
    assert parse_positive('0.75', 0.5) == 0.75
    assert parse_positive('x', 0.5) == 0.5
    assert parse_positive(float('nan'), 0.5) == 0.5
    assert parse_positive(-1, 0.5) == 0.01


def test_parse_phase_wraps():
    assert parse_phase(370) == pytest.approx(10.0)
    assert parse_phase(-90) == pytest.approx(270.0)
    assert parse_phase('bad') == 0.0


def test_parse_parameters_from_strings():
    """UI text is parsed into typed parameters."""
    params = parse_parameters(dipole_length='1.0', phase_offset='45', director_count='6')
    assert params.dipole_length == 1.0
    assert params.phase_offset == 45.0
    assert params.director_count == 6
    assert params.separation == 0.5


def test_parse_parameters_rejects_unknown_keys():
    with pytest.raises(TypeError):
        parse_parameters(length=1.0)


def test_config_is_immutable():
    config = RenderConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.variant = AntennaVariant.YAGI
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.parameters.director_count = 5


def test_config_copies():
    config = RenderConfig()
    yagi = config.with_variant('yagi').with_parameters(director_count=5).with_view_mode('power')

    assert yagi.variant is AntennaVariant.YAGI
    assert yagi.parameters.director_count == 5
    assert yagi.view_mode is ViewMode.POWER
    assert config == RenderConfig()


def test_variant_lookup():
    assert AntennaVariant.from_value('DIPOLE') is AntennaVariant.DIPOLE
    assert AntennaVariant.from_value(' array ') is AntennaVariant.ARRAY
    assert AntennaVariant.YAGI.label == 'Yagi-Uda'
    with pytest.raises(ValueError):
        AntennaVariant.from_value('helix')


def test_view_mode_lookup():
    assert ViewMode.from_value('Gain') is ViewMode.GAIN
    with pytest.raises(ValueError):
        ViewMode.from_value('bogus')


def test_config_coerces_string_values():
    """Plain strings are normalized to enum members."""
    config = RenderConfig(variant='yagi', view_mode='POWER')

    assert config.variant is AntennaVariant.YAGI
    assert config.view_mode is ViewMode.POWER
    assert config.variant.value == 'yagi'


def test_config_rejects_unknown_values():
    with pytest.raises(ValueError):
        RenderConfig(variant='helix')
    with pytest.raises(ValueError):
        RenderConfig(view_mode='log')
