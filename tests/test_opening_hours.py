"""
Tests for opening hours and time-slot generation.
"""

from datetime import datetime

from utils.opening_hours import (
    DEFAULT_SLOTS,
    day_name,
    generate_slots,
    get_time_slots,
    is_time_within_opening_hours,
    service_for_time,
)

# 2026-03-16 is a Monday
MONDAY = '2026-03-16'
TUESDAY = '2026-03-17'

HOURS = {
    'Lundi': {
        'isOpen': True, 'hasSecondService': True,
        'openTime1': '11:30', 'closeTime1': '14:30',
        'openTime2': '18:30', 'closeTime2': '22:30',
    },
    'Mardi': {'isOpen': False},
}


class TestGenerateSlots:
    """Slots every 30 minutes, at least one hour before closing."""

    def test_lunch_slots(self):
        assert generate_slots('11:30', '14:30') == ['11:30', '12:00', '12:30', '13:00', '13:30']

    def test_exactly_one_hour(self):
        assert generate_slots('12:00', '13:00') == ['12:00']

    def test_too_short_service(self):
        assert generate_slots('12:00', '12:45') == []

    def test_missing_times(self):
        assert generate_slots(None, '14:00') == []

    def test_service_closing_after_midnight(self):
        assert generate_slots('22:00', '00:30') == ['22:00', '22:30', '23:00', '23:30']
        assert generate_slots('18:00', '01:00')[-1] == '23:30'

    def test_closing_just_after_midnight(self):
        assert generate_slots('22:30', '00:15') == ['22:30', '23:00']


class TestDayName:
    """French weekday keys."""

    def test_day_name(self):
        assert day_name(MONDAY) == 'Lundi'
        assert day_name('2026-03-22') == 'Dimanche'


class TestGetTimeSlots:
    """Slots offered on a date."""

    def test_default_slots_without_opening_hours(self):
        slots = get_time_slots(None, MONDAY)
        assert slots['lunch'] == DEFAULT_SLOTS['lunch']
        assert slots['dinner'] == DEFAULT_SLOTS['dinner']
        assert slots['closed'] is False

    def test_open_day(self):
        slots = get_time_slots(HOURS, MONDAY)
        assert slots['lunch'][0] == '11:30'
        assert slots['dinner'] == ['18:30', '19:00', '19:30', '20:00', '20:30', '21:00', '21:30']

    def test_closed_weekday(self):
        slots = get_time_slots(HOURS, TUESDAY)
        assert slots == {'lunch': [], 'dinner': [], 'closed': True}

    def test_weekday_missing_from_hours(self):
        assert get_time_slots(HOURS, '2026-03-18')['closed'] is True

    def test_whole_day_closed(self):
        closed_days = [{'date': MONDAY, 'service': 'all'}]
        assert get_time_slots(HOURS, MONDAY, closed_days)['closed'] is True

    def test_single_service_closed(self):
        closed_days = [{'date': MONDAY, 'service': 'dinner'}]
        slots = get_time_slots(HOURS, MONDAY, closed_days)
        assert slots['dinner'] == []
        assert slots['lunch']
        assert slots['closed'] is False

    def test_closed_day_on_other_date_ignored(self):
        closed_days = [{'date': '2026-03-23', 'service': 'all'}]
        assert get_time_slots(HOURS, MONDAY, closed_days)['closed'] is False

    def test_past_slots_removed_today(self):
        now = datetime(2026, 3, 16, 19, 10)
        slots = get_time_slots(HOURS, MONDAY, now=now)
        assert slots['lunch'] == []
        assert slots['dinner'][0] == '19:30'

    def test_past_filter_only_applies_today(self):
        now = datetime(2026, 3, 15, 23, 0)
        slots = get_time_slots(HOURS, MONDAY, now=now)
        assert slots['lunch'][0] == '11:30'


class TestIsTimeWithinOpeningHours:
    """Service lookup for a booking time."""

    def test_lunch_and_dinner(self):
        assert is_time_within_opening_hours(HOURS, MONDAY, '12:00') == 'lunch'
        assert is_time_within_opening_hours(HOURS, MONDAY, '20:00') == 'dinner'

    def test_boundaries(self):
        assert is_time_within_opening_hours(HOURS, MONDAY, '11:30') == 'lunch'
        assert is_time_within_opening_hours(HOURS, MONDAY, '14:30') is None

    def test_between_services(self):
        assert is_time_within_opening_hours(HOURS, MONDAY, '16:00') is None

    def test_closed_day(self):
        assert is_time_within_opening_hours(HOURS, TUESDAY, '12:00') is None

    def test_dinner_closing_after_midnight(self):
        late = {'Lundi': {'isOpen': True, 'hasSecondService': True, 'openTime1': '11:30',
                          'closeTime1': '14:00', 'openTime2': '18:00', 'closeTime2': '01:00'}}
        assert is_time_within_opening_hours(late, MONDAY, '23:30') == 'dinner'
        assert is_time_within_opening_hours(late, MONDAY, '00:30') is None
        assert is_time_within_opening_hours(late, MONDAY, '17:30') is None

    def test_without_opening_hours(self):
        assert is_time_within_opening_hours(None, MONDAY, '12:00') == 'lunch'
        assert is_time_within_opening_hours(None, MONDAY, '19:00') == 'dinner'


class TestServiceForTime:
    """Statistics service buckets."""

    def test_buckets(self):
        assert service_for_time('12:30') == 'lunch'
        assert service_for_time('19:00') == 'dinner'
        assert service_for_time('16:00') is None
        assert service_for_time('garbage') is None
