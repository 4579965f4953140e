from src.timecalc.timecalc.core.enums import RoundingType
from src.timecalc.timecalc.rules.rounding import Rounder, RoundingConfig, resolve_anchor, round_time


def test_round_up_to_quarter_hour():
    cfg = RoundingConfig(type=RoundingType.UP, interval=15)
    assert round_time(481, cfg) == 495


def test_value_on_grid_is_unchanged():
    cfg = RoundingConfig(type=RoundingType.UP, interval=15)
    assert round_time(480, cfg) == 480


def test_round_down_and_nearest():
    down = RoundingConfig(type=RoundingType.DOWN, interval=15)
    nearest = RoundingConfig(type=RoundingType.NEAREST, interval=15)

    assert round_time(494, down) == 480
    assert round_time(487, nearest) == 480
    assert round_time(488, nearest) == 495


def test_nearest_exact_tie_rounds_up():
    cfg = RoundingConfig(type=RoundingType.NEAREST, interval=10)
    assert round_time(485, cfg) == 490


def test_grid_rounding_is_idempotent():
    for kind in (RoundingType.UP, RoundingType.DOWN, RoundingType.NEAREST):
        cfg = RoundingConfig(type=kind, interval=15)
        for minutes in range(470, 500):
            once = round_time(minutes, cfg)
            assert round_time(once, cfg) == once


def test_add_and_subtract():
    assert round_time(480, RoundingConfig(type=RoundingType.ADD, add_value=10)) == 490
    assert round_time(480, RoundingConfig(type=RoundingType.SUBTRACT, add_value=10)) == 470
    assert round_time(5, RoundingConfig(type=RoundingType.SUBTRACT, add_value=10)) == 0


def test_missing_config_and_zero_interval_are_no_ops():
    assert round_time(481, None) == 481
    assert round_time(481, RoundingConfig(type=RoundingType.NONE, interval=15)) == 481
    assert round_time(481, RoundingConfig(type=RoundingType.UP, interval=0)) == 481


def test_anchor_shifts_the_grid():
    cfg = RoundingConfig(type=RoundingType.UP, interval=15, anchor=5)
    assert round_time(481, cfg) == 485
    assert round_time(485, cfg) == 485


def test_resolve_anchor_uses_plan_start_when_relative():
    cfg = RoundingConfig(type=RoundingType.UP, interval=15, relative_to_plan=True)
    resolved = resolve_anchor(cfg, plan_start=425)

    assert resolved.anchor == 425
    assert round_time(441, resolved) == 455


def test_resolve_anchor_global_default_only_when_unset():
    unset = RoundingConfig(type=RoundingType.UP, interval=15)
    explicit_off = RoundingConfig(type=RoundingType.UP, interval=15, relative_to_plan=False)

    assert resolve_anchor(unset, plan_start=425, default_relative=True).anchor == 425
    assert resolve_anchor(explicit_off, plan_start=425, default_relative=True).anchor == 0
    assert resolve_anchor(unset, plan_start=None, default_relative=True).anchor == 0


def test_rounder_uses_direction_specific_config():
    rounder = Rounder(
        come=RoundingConfig(type=RoundingType.UP, interval=15),
        go=RoundingConfig(type=RoundingType.DOWN, interval=15),
    )
    assert rounder.round_come(481) == 495
    assert rounder.round_go(1029) == 1020
