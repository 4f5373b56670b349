"""
Opening hours and booking time-slot helpers.

Opening hours are stored per restaurant as a JSON document keyed by French
weekday names::

    {"Lundi": {"isOpen": true, "hasSecondService": true,
               "openTime1": "11:30", "closeTime1": "14:30",
               "openTime2": "18:30", "closeTime2": "22:30"}, ...}

Service 1 is lunch, service 2 (when enabled) is dinner.
"""

from datetime import date, datetime

# Indexed by date.weekday() (Monday == 0)
DAY_NAMES = ['Lundi', 'Mardi', 'Mercredi', 'Jeudi', 'Vendredi', 'Samedi', 'Dimanche']

DEFAULT_SLOTS = {
    'lunch': ['12:00', '12:30', '13:00', '13:30'],
    'dinner': ['19:00', '19:30', '20:00', '20:30', '21:00', '21:30'],
}

SERVICES = ('all', 'lunch', 'dinner')

SLOT_INTERVAL_MINUTES = 30
MIN_MINUTES_BEFORE_CLOSING = 60
MINUTES_PER_DAY = 24 * 60


def to_minutes(hhmm: str) -> int:
    """Convert 'HH:MM' to minutes since midnight."""
    hours, minutes = hhmm.split(':')
    return int(hours) * 60 + int(minutes)


def from_minutes(total: int) -> str:
    """Convert minutes since midnight to 'HH:MM'."""
    return f'{total // 60:02d}:{total % 60:02d}'


def _as_date(value) -> date:
    if isinstance(value, date):
        return value
    return datetime.strptime(value, '%Y-%m-%d').date()


def day_name(value) -> str:
    """
    Get the French weekday name used as opening-hours key.

    Args:
        value: date or 'YYYY-MM-DD' string

    Returns:
        Weekday name (e.g. 'Lundi')
    """
    return DAY_NAMES[_as_date(value).weekday()]


def get_day_hours(opening_hours: dict | None, value) -> dict | None:
    """
    Get the opening hours entry for a date.

    Returns:
        The day's entry, or None when the restaurant is closed that weekday
    """
    if not opening_hours:
        return None
    day_hours = opening_hours.get(day_name(value))
    if not day_hours or not day_hours.get('isOpen'):
        return None
    return day_hours


def generate_slots(start_time: str, end_time: str) -> list:
    """
    Generate bookable slots for one service.

    Slots start at the opening time and step every 30 minutes; a slot is
    kept only if at least one hour remains before closing. A closing time
    earlier than the opening time falls after midnight; slots are then
    offered up to midnight.

    Args:
        start_time: Opening time 'HH:MM'
        end_time: Closing time 'HH:MM'

    Returns:
        List of 'HH:MM' strings
    """
    if not start_time or not end_time:
        return []

    slots = []
    current = to_minutes(start_time)
    end = to_minutes(end_time)
    if end <= current:
        end += MINUTES_PER_DAY

    while current < min(end, MINUTES_PER_DAY):
        if end - current >= MIN_MINUTES_BEFORE_CLOSING:
            slots.append(from_minutes(current))
        current += SLOT_INTERVAL_MINUTES

    return slots


def closed_services(closed_days: list, value) -> set:
    """
    Collect the services closed on a date.

    Args:
        closed_days: Closed-day dicts with 'date' and 'service'
        value: date or 'YYYY-MM-DD' string

    Returns:
        Set of service names ('all', 'lunch', 'dinner')
    """
    date_str = _as_date(value).isoformat()
    return {
        (closed_day.get('service') or 'all')
        for closed_day in closed_days or []
        if closed_day.get('date') == date_str
    }


def get_time_slots(opening_hours: dict | None, value, closed_days: list = None,
                   now: datetime = None) -> dict:
    """
    Compute the lunch and dinner slots offered on a date.

    Args:
        opening_hours: Restaurant opening hours document (or None)
        value: date or 'YYYY-MM-DD' string
        closed_days: Restaurant closed days
        now: Current local datetime; slots already passed today are dropped

    Returns:
        Dict with 'lunch' and 'dinner' lists and a 'closed' flag
    """
    target = _as_date(value)

    if not opening_hours:
        slots = {'lunch': list(DEFAULT_SLOTS['lunch']), 'dinner': list(DEFAULT_SLOTS['dinner'])}
    else:
        day_hours = get_day_hours(opening_hours, target)
        if day_hours is None:
            return {'lunch': [], 'dinner': [], 'closed': True}

        slots = {
            'lunch': generate_slots(day_hours.get('openTime1'), day_hours.get('closeTime1')),
            'dinner': (
                generate_slots(day_hours.get('openTime2'), day_hours.get('closeTime2'))
                if day_hours.get('hasSecondService') else []
            ),
        }

    closed = closed_services(closed_days, target)
    if 'all' in closed:
        return {'lunch': [], 'dinner': [], 'closed': True}
    for service in ('lunch', 'dinner'):
        if service in closed:
            slots[service] = []

    if now is not None and target == now.date():
        current = now.hour * 60 + now.minute
        for service in ('lunch', 'dinner'):
            slots[service] = [slot for slot in slots[service] if to_minutes(slot) > current]

    slots['closed'] = not slots['lunch'] and not slots['dinner']
    return slots


def is_time_within_opening_hours(opening_hours: dict | None, value, time_str: str) -> str | None:
    """
    Find which service a booking time falls into.

    A time matches a service when openTime <= time < closeTime; for a
    service closing after midnight, from openTime until midnight. Without
    opening hours, times before 16:00 count as lunch and later ones as dinner.

    Args:
        opening_hours: Restaurant opening hours document (or None)
        value: date or 'YYYY-MM-DD' string
        time_str: Booking time 'HH:MM'

    Returns:
        'lunch', 'dinner', or None if outside opening hours
    """
    if not opening_hours:
        return 'lunch' if to_minutes(time_str) < 16 * 60 else 'dinner'

    day_hours = get_day_hours(opening_hours, value)
    if day_hours is None:
        return None

    if _in_range(time_str, day_hours.get('openTime1'), day_hours.get('closeTime1')):
        return 'lunch'
    if day_hours.get('hasSecondService') and _in_range(
            time_str, day_hours.get('openTime2'), day_hours.get('closeTime2')):
        return 'dinner'
    return None


def _in_range(time_str: str, start: str, end: str) -> bool:
    if not start or not end:
        return False
    start_minutes, end_minutes = to_minutes(start), to_minutes(end)
    if end_minutes <= start_minutes:
        return start_minutes <= to_minutes(time_str)
    return start_minutes <= to_minutes(time_str) < end_minutes


def service_for_time(time_str: str) -> str | None:
    """
    Classify a booking time for statistics.

    Lunch is 11:00-14:59, dinner 18:00-23:59.

    Returns:
        'lunch', 'dinner' or None
    """
    try:
        hour = int(time_str.split(':')[0])
    except (ValueError, AttributeError):
        hour = 0
    if 11 <= hour < 15:
        return 'lunch'
    if 18 <= hour <= 23:
        return 'dinner'
    return None
