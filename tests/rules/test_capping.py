from src.timecalc.timecalc.core.enums import CappingSource
from src.timecalc.timecalc.rules.capping import (
    CappedTime,
    aggregate_capping,
    cap_arrival,
    cap_departure,
    max_net_time_capping,
)


def test_early_arrival_is_clamped_to_window_start():
    minutes, capped = cap_arrival(400, 420)

    assert minutes == 420
    assert capped.minutes == 20
    assert capped.source == CappingSource.EARLY_ARRIVAL


def test_variable_work_time_opens_window_early():
    minutes, capped = cap_arrival(400, 420, tolerance_minus=10, variable_work_time=True)

    assert minutes == 410
    assert capped.minutes == 10


def test_arrival_inside_window_is_untouched():
    assert cap_arrival(430, 420) == (430, None)
    assert cap_arrival(300, None) == (300, None)


def test_late_departure_respects_go_plus():
    minutes, capped = cap_departure(1200, 1140, tolerance_plus=15)

    assert minutes == 1155
    assert capped.minutes == 45
    assert capped.source == CappingSource.LATE_LEAVE


def test_max_net_time_capping():
    assert max_net_time_capping(600, None) is None
    assert max_net_time_capping(600, 600) is None
    assert max_net_time_capping(630, 600).minutes == 30


def test_aggregate_skips_empty_items():
    result = aggregate_capping(
        [
            CappedTime(minutes=20, source=CappingSource.EARLY_ARRIVAL, reason="x"),
            None,
            CappedTime(minutes=0, source=CappingSource.LATE_LEAVE, reason="y"),
            CappedTime(minutes=15, source=CappingSource.LATE_LEAVE, reason="z"),
        ]
    )

    assert result.total_capped == 35
    assert [item.source for item in result.items] == [CappingSource.EARLY_ARRIVAL, CappingSource.LATE_LEAVE]
