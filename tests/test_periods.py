from datetime import date, datetime, timezone
from types import SimpleNamespace

from src.attendance.config import settings
from src.attendance.services.periods import (
    day_name,
    group_by_period,
    period_for,
    period_label_for,
)


def test_twentieth_and_twenty_first_fall_in_adjacent_periods():
    assert period_label_for(date(2024, 3, 20)) != period_label_for(date(2024, 3, 21))
    assert period_for(date(2024, 3, 20)).end == date(2024, 3, 20)
    assert period_for(date(2024, 3, 21)).start == date(2024, 3, 21)


def test_period_spans_twenty_first_to_twentieth():
    assert period_label_for(date(2024, 3, 21)) == period_label_for(date(2024, 4, 20))
    period = period_for(date(2024, 4, 2))
    assert period.start == date(2024, 3, 21)
    assert period.end == date(2024, 4, 20)


def test_early_days_of_a_month_share_one_period():
    labels = {period_label_for(date(2024, 6, day)) for day in range(1, 21)}
    assert len(labels) == 1


def test_january_rolls_back_to_previous_december():
    period = period_for(date(2024, 1, 5))
    assert period.start == date(2023, 12, 21)
    assert period.end == date(2024, 1, 20)


def test_december_period_ends_next_year():
    period = period_for(datetime(2024, 12, 25, 9, 0))
    assert period.start == date(2024, 12, 21)
    assert period.end == date(2025, 1, 20)


def test_label_embeds_both_boundaries():
    assert period_label_for(date(2024, 4, 2)) == "فترة: 21/3/2024 إلى 20/4/2024"


def test_aware_timestamps_use_configured_timezone(monkeypatch):
    late_evening_utc = datetime(2024, 3, 20, 23, 30, tzinfo=timezone.utc)
    assert period_for(late_evening_utc).end == date(2024, 3, 20)

    monkeypatch.setattr(settings, "timezone", "Africa/Cairo")
    assert period_for(late_evening_utc).start == date(2024, 3, 21)


def test_day_name_is_arabic_weekday():
    assert day_name(date(2024, 3, 16)) == "السبت"


def test_group_by_period_is_stable_and_first_seen_ordered():
    p2_first = SimpleNamespace(name="p2-rec1", date=date(2024, 4, 10))
    p1_first = SimpleNamespace(name="p1-rec1", date=date(2024, 3, 15))
    p2_second = SimpleNamespace(name="p2-rec2", date=date(2024, 3, 25))

    groups = group_by_period([p2_first, p1_first, p2_second])

    labels = list(groups)
    assert labels == [period_label_for(date(2024, 4, 10)), period_label_for(date(2024, 3, 15))]
    assert [record.name for record in groups[labels[0]]] == ["p2-rec1", "p2-rec2"]
    assert [record.name for record in groups[labels[1]]] == ["p1-rec1"]


def test_group_by_period_with_custom_key_and_empty_input():
    assert group_by_period([]) == {}
    items = [{"start": date(2024, 5, 1)}]
    groups = group_by_period(items, key=lambda item: item["start"])
    assert list(groups) == [period_label_for(date(2024, 5, 1))]
