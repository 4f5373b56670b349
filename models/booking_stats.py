"""
Monthly booking statistics.
Pure aggregation over booking dicts; callers load the rows.
"""

import calendar
from datetime import date

from utils.opening_hours import service_for_time

# Statuses counted as realised covers
STAT_ACTIVE_STATUSES = ('confirmed',)
TOP_CLIENTS_LIMIT = 10


def calc_change(current: float, previous: float) -> int:
    """
    Percentage change from the previous period.

    A previous value of 0 gives 100 when there is activity now, else 0.
    """
    if previous == 0:
        return 100 if current > 0 else 0
    return round((current - previous) / previous * 100)


def previous_month(year: int, month: int) -> tuple:
    """Return (year, month) of the month before."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def _covers(bookings: list) -> int:
    return sum(b['guests'] for b in bookings)


def _with_status(bookings: list, status: str) -> list:
    return [b for b in bookings if b['status'] == status]


def compute_monthly_stats(current: list, previous: list, year: int, month: int,
                          capacity: int, service: str = None, today: date = None) -> dict:
    """
    Compute dashboard statistics for a month.

    Args:
        current: Bookings of the month
        previous: Bookings of the previous month
        year: Year of the month
        month: Month (1-12)
        capacity: Covers per day used for occupation rates
        service: Optional 'lunch' or 'dinner' filter for daily occupation
        today: Reference date for past/today flags

    Returns:
        Statistics dict
    """
    active = [b for b in current if b['status'] in STAT_ACTIVE_STATUSES]
    previous_active = [b for b in previous if b['status'] in STAT_ACTIVE_STATUSES]

    cancelled = _with_status(current, 'cancelled')
    noshows = _with_status(current, 'noshow')

    total_covers = _covers(active)
    cancellation_covers = _covers(cancelled)
    noshow_covers = _covers(noshows)

    lunch_covers = _covers([b for b in active if service_for_time(b['time']) == 'lunch'])
    dinner_covers = _covers([b for b in active if service_for_time(b['time']) == 'dinner'])

    daily_occupation = []
    days_in_month = calendar.monthrange(year, month)[1]
    for day in range(1, days_in_month + 1):
        day_str = f'{year:04d}-{month:02d}-{day:02d}'
        day_bookings = [b for b in active if b['date'] == day_str]
        if service in ('lunch', 'dinner'):
            day_bookings = [b for b in day_bookings if service_for_time(b['time']) == service]

        guests = _covers(day_bookings)
        rate = min(100, round(guests / capacity * 100)) if capacity > 0 else 0
        current_day = date(year, month, day)

        daily_occupation.append({
            'date': day_str,
            'day': day,
            'guests': guests,
            'unoccupied': max(0, capacity - guests),
            'occupation_rate': rate,
            'is_past': today is not None and current_day < today,
            'is_today': today is not None and current_day == today,
        })

    max_occupation = max((d['occupation_rate'] for d in daily_occupation), default=0)
    best_day = None
    if max_occupation > 0:
        best_day = next(d for d in daily_occupation if d['occupation_rate'] == max_occupation)

    clients = {}
    for booking in active:
        key = (booking.get('email') or '').lower()
        if key not in clients:
            clients[key] = {
                'email': booking.get('email'),
                'first_name': booking.get('first_name'),
                'last_name': booking.get('last_name'),
                'phone': booking.get('phone'),
                'total_covers': 0,
                'reservation_count': 0,
            }
        clients[key]['total_covers'] += booking['guests']
        clients[key]['reservation_count'] += 1

    top_clients = sorted(clients.values(), key=lambda c: c['total_covers'], reverse=True)

    return {
        'month': f'{year:04d}-{month:02d}',
        'capacity': capacity,
        'total_covers': total_covers,
        'total_reservations': len(active),
        'covers_change': calc_change(total_covers, _covers(previous_active)),
        'cancellations': len(cancelled),
        'cancellation_covers': cancellation_covers,
        'cancellations_change': calc_change(
            cancellation_covers, _covers(_with_status(previous, 'cancelled'))),
        'noshows': len(noshows),
        'noshow_covers': noshow_covers,
        'noshows_change': calc_change(noshow_covers, _covers(_with_status(previous, 'noshow'))),
        'lunch_covers': lunch_covers,
        'dinner_covers': dinner_covers,
        'daily_occupation': daily_occupation,
        'max_occupation': max_occupation,
        'best_day': best_day,
        'top_clients': top_clients[:TOP_CLIENTS_LIMIT],
    }
