"""Tests for the pure text helpers used by the widgets."""

from empire.data.upgrades import ALL_UPGRADES
from empire.ui.hud import sparkline
from empire.ui.upgrade_panel import _stat_summary


def test_sparkline():
    assert sparkline([]) == ""
    assert sparkline([5, 5, 5]) == "▁▁▁"
    line = sparkline([0, 50, 100])
    assert line[0] == "▁"
    assert line[-1] == "█"
    assert len(line) == 3


def test_stat_summary():
    assert _stat_summary(ALL_UPGRADES["profit_margin"], 0) == ""
    assert _stat_summary(ALL_UPGRADES["profit_margin"], 2) == "+10% income"
    assert _stat_summary(ALL_UPGRADES["legacy_boost"], 1) == "x1.10 total income"
    assert _stat_summary(ALL_UPGRADES["starter_pack"], 2) == "start with $10K"
    assert "cheaper" in _stat_summary(ALL_UPGRADES["cost_reduction"], 5)
