"""
Property-based tests for class schedule parsing and building.

Building the parsed form of a canonical schedule gives the same string
back, grouped day notations expand to one entry per day, and entries come
out in weekday order.
"""

import pytest
from hypothesis import given, strategies as st

from apps.core.utils.schedule import (
    DAYS,
    ScheduleEntry,
    build_schedule,
    normalize_schedule,
    parse_schedule,
    timetable_slots,
)

times = st.builds(
    lambda h, m: f'{h:02d}:{m:02d}',
    st.integers(min_value=0, max_value=23),
    st.sampled_from([0, 15, 30, 45]),
)

entries = st.builds(ScheduleEntry, st.sampled_from(DAYS), times, times)


class TestParse:

    def test_single_entry(self):
        assert parse_schedule('월 18:00~20:00') == [ScheduleEntry('월', '18:00', '20:00')]

    def test_slash_separated_days(self):
        parsed = parse_schedule('월/수/금 18:00~20:00')
        assert [e.day for e in parsed] == ['월', '수', '금']
        assert {(e.start_time, e.end_time) for e in parsed} == {('18:00', '20:00')}

    def test_concatenated_days(self):
        assert [e.day for e in parse_schedule('화목 19:00-21:00')] == ['화', '목']

    def test_entries_sorted_by_weekday(self):
        parsed = parse_schedule('금 10:00~12:00, 월 09:00~10:00')
        assert [e.day for e in parsed] == ['월', '금']

    def test_unparseable_parts_are_skipped(self):
        assert parse_schedule('매주 협의, 토 10:00~12:00') == [ScheduleEntry('토', '10:00', '12:00')]

    def test_empty(self):
        assert parse_schedule('') == []
        assert parse_schedule(None) == []


class TestBuild:

    def test_incomplete_entries_dropped(self):
        built = build_schedule([ScheduleEntry('월', '18:00', ''), ScheduleEntry('수', '19:00', '21:00')])
        assert built == '수 19:00~21:00'

    def test_sorted_and_joined(self):
        built = build_schedule([ScheduleEntry('일', '10:00', '11:00'), ScheduleEntry('화', '09:00', '10:00')])
        assert built == '화 09:00~10:00, 일 10:00~11:00'

    @given(st.lists(entries, max_size=7))
    def test_build_after_parse_is_stable(self, schedule_entries):
        canonical = build_schedule(schedule_entries)
        assert build_schedule(parse_schedule(canonical)) == canonical

    @given(st.lists(entries, min_size=1, max_size=7))
    def test_parse_recovers_every_entry(self, schedule_entries):
        parsed = parse_schedule(build_schedule(schedule_entries))
        assert sorted(parsed, key=repr) == sorted(schedule_entries, key=repr)


class TestNormalize:

    def test_grouped_days_become_canonical(self):
        assert normalize_schedule('월/수 18:00~20:00') == '월 18:00~20:00, 수 18:00~20:00'

    def test_blank_is_empty(self):
        assert normalize_schedule('  ') == ''

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            normalize_schedule('언제든지')

    def test_timetable_slots(self):
        slots = timetable_slots('수 19:30~21:00')
        assert slots == [{
            'day': '수',
            'dayIndex': 2,
            'startTime': '19:30',
            'endTime': '21:00',
            'startHour': 19,
            'startMinute': 30,
            'endHour': 21,
            'endMinute': 0,
        }]
