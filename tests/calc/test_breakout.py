import pytest

from fabricmetrics.calc.breakout import (
    find_breakout_option,
    negotiate_link_speed,
    resolve_breakout,
)
from fabricmetrics.errors import ConfigurationError
from fabricmetrics.types import (
    STANDARD_BREAKOUT_OPTIONS,
    BreakoutOption,
    PortSpeed,
    parse_breakout_label,
)


def test_resolve_breakout_scales_port_count_and_lane_speed() -> None:
    """4x200G on 64 x 800G ports yields 256 logical 200G ports."""
    res = resolve_breakout(PortSpeed.G800, "4x200G", STANDARD_BREAKOUT_OPTIONS, 64)
    assert res.factor == 4
    assert res.effective_port_count == 256
    assert res.effective_speed is PortSpeed.G200
    assert res.is_breakout


def test_resolve_breakout_identity_mode() -> None:
    res = resolve_breakout(PortSpeed.G400, "1x400G", STANDARD_BREAKOUT_OPTIONS, 32)
    assert res.factor == 1
    assert res.effective_port_count == 32
    assert res.effective_speed is PortSpeed.G400
    assert not res.is_breakout


def test_unknown_mode_raises_configuration_error() -> None:
    """A mode missing from the table is an error, not a silent default."""
    with pytest.raises(ConfigurationError, match="3x100G"):
        resolve_breakout(PortSpeed.G400, "3x100G", STANDARD_BREAKOUT_OPTIONS)


def test_speed_without_table_entry_raises() -> None:
    table = {PortSpeed.G400: (BreakoutOption("1x400G", 1),)}
    with pytest.raises(ConfigurationError, match="800G"):
        find_breakout_option(PortSpeed.G800, "1x800G", table)


def test_unlabelled_mode_derives_lane_speed_from_factor() -> None:
    """Vendor-specific labels fall back to port speed / factor."""
    table = {PortSpeed.G400: (BreakoutOption("quad", 4),)}
    res = resolve_breakout(PortSpeed.G400, "quad", table, 2)
    assert res.effective_speed is PortSpeed.G100
    assert res.effective_port_count == 8


def test_unlabelled_mode_with_unknown_lane_speed_raises() -> None:
    table = {PortSpeed.G400: (BreakoutOption("odd", 3),)}
    with pytest.raises(ConfigurationError):
        resolve_breakout(PortSpeed.G400, "odd", table)


def test_negotiate_link_speed_picks_slower_end() -> None:
    assert negotiate_link_speed(PortSpeed.G400, PortSpeed.G100) is PortSpeed.G100
    assert negotiate_link_speed(PortSpeed.G100, PortSpeed.G400) is PortSpeed.G100
    assert negotiate_link_speed(PortSpeed.G200, PortSpeed.G200) is PortSpeed.G200


def test_parse_breakout_label() -> None:
    assert parse_breakout_label("4x200G") == (4, PortSpeed.G200)
    assert parse_breakout_label("2x800g") == (2, PortSpeed.G800)
    assert parse_breakout_label("1x1.6T") == (1, PortSpeed.T1_6)
    assert parse_breakout_label("breakout") is None
    assert parse_breakout_label("4x300G") is None


def test_port_speed_parsing() -> None:
    assert PortSpeed.from_string("400g") is PortSpeed.G400
    assert PortSpeed.from_string(PortSpeed.G25) is PortSpeed.G25
    assert PortSpeed.T1_6.gbps == 1600.0
    assert PortSpeed.from_gbps(50) is PortSpeed.G50
    assert PortSpeed.from_gbps(75) is None
    with pytest.raises(ConfigurationError, match="Unrecognized port speed"):
        PortSpeed.from_string("300G")


def test_breakout_option_rejects_zero_factor() -> None:
    with pytest.raises(ConfigurationError):
        BreakoutOption("0x400G", 0)


def test_standard_table_covers_every_speed() -> None:
    assert set(STANDARD_BREAKOUT_OPTIONS) == set(PortSpeed)
    for speed, options in STANDARD_BREAKOUT_OPTIONS.items():
        assert options[0].factor == 1
        assert parse_breakout_label(options[0].type) == (1, speed)
