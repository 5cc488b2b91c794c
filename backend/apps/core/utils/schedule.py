"""
Weekly class schedule strings.

Canonical form: "월 18:00~20:00, 수 19:00~21:00" (entries in weekday
order). Older rows use a shared time range for several days, either
slash separated ("월/수/금 18:00~20:00") or run together ("월수금 ...");
both expand into one entry per day.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List

DAYS = ['월', '화', '수', '목', '금', '토', '일']

ENTRY_PATTERN = re.compile(
    r'([월화수목금토일/]+)\s*(\d{1,2}:\d{2})\s*[~\-]\s*(\d{1,2}:\d{2})'
)


@dataclass(frozen=True)
class ScheduleEntry:
    day: str
    start_time: str
    end_time: str

    @property
    def is_complete(self) -> bool:
        return bool(self.day and self.start_time and self.end_time)

    def to_dict(self) -> dict:
        return {'day': self.day, 'startTime': self.start_time, 'endTime': self.end_time}


def _day_index(day: str) -> int:
    return DAYS.index(day) if day in DAYS else len(DAYS)


def parse_schedule(schedule: str) -> List[ScheduleEntry]:
    """
    Parse a schedule string into entries sorted by weekday.

    Parts that do not look like "<days> HH:MM~HH:MM" are skipped.
    """
    if not schedule:
        return []

    entries: List[ScheduleEntry] = []
    for part in schedule.split(','):
        match = ENTRY_PATTERN.search(part.strip())
        if not match:
            continue
        day_group, start_time, end_time = match.groups()
        for day in day_group:
            if day in DAYS:
                entries.append(ScheduleEntry(day, start_time, end_time))

    return sorted(entries, key=lambda e: _day_index(e.day))


def build_schedule(entries: Iterable[ScheduleEntry]) -> str:
    valid = [e for e in entries if e.is_complete]
    valid.sort(key=lambda e: _day_index(e.day))
    return ', '.join(f'{e.day} {e.start_time}~{e.end_time}' for e in valid)


def normalize_schedule(schedule: str) -> str:
    """
    Canonicalise a schedule string.

    Raises:
        ValueError: If non-empty input contains no recognisable entry
    """
    if not schedule or not schedule.strip():
        return ''
    entries = parse_schedule(schedule)
    if not entries:
        raise ValueError(f'Unrecognised schedule: {schedule}')
    return build_schedule(entries)


def _split_time(value: str):
    hour, minute = value.split(':')
    return int(hour), int(minute)


def timetable_slots(schedule: str) -> List[dict]:
    """Entries with numeric hours/minutes for laying out the weekly timetable."""
    slots = []
    for entry in parse_schedule(schedule):
        start_hour, start_minute = _split_time(entry.start_time)
        end_hour, end_minute = _split_time(entry.end_time)
        slots.append({
            'day': entry.day,
            'dayIndex': _day_index(entry.day),
            'startTime': entry.start_time,
            'endTime': entry.end_time,
            'startHour': start_hour,
            'startMinute': start_minute,
            'endHour': end_hour,
            'endMinute': end_minute,
        })
    return slots
