"""
Tests for monthly booking statistics (pure functions).
"""

from datetime import date

from models.booking_stats import calc_change, previous_month, compute_monthly_stats


def _booking(day, time='19:30', guests=2, status='confirmed', email='a@b.ch'):
    return {
        'date': f'2026-03-{day:02d}',
        'time': time,
        'guests': guests,
        'status': status,
        'email': email,
        'first_name': 'A',
        'last_name': 'B',
        'phone': '',
    }


class TestHelpers:
    """calc_change and previous_month."""

    def test_calc_change(self):
        assert calc_change(150, 100) == 50
        assert calc_change(50, 100) == -50
        assert calc_change(5, 0) == 100
        assert calc_change(0, 0) == 0

    def test_previous_month(self):
        assert previous_month(2026, 3) == (2026, 2)
        assert previous_month(2026, 1) == (2025, 12)


class TestComputeMonthlyStats:
    """Aggregation over a month of bookings."""

    def test_totals_and_services(self):
        current = [
            _booking(5, '12:00', 4),
            _booking(5, '20:00', 6, email='c@d.ch'),
            _booking(6, '19:00', 3, status='cancelled'),
            _booking(7, '19:00', 2, status='noshow'),
            _booking(8, '19:00', 8, status='pending'),
        ]
        previous = [{**_booking(5, guests=5), 'date': '2026-02-05'}]

        stats = compute_monthly_stats(current, previous, 2026, 3, capacity=20, today=date(2026, 3, 6))

        assert stats['month'] == '2026-03'
        assert stats['total_covers'] == 10
        assert stats['total_reservations'] == 2
        assert stats['covers_change'] == 100
        assert stats['lunch_covers'] == 4
        assert stats['dinner_covers'] == 6
        assert stats['cancellations'] == 1
        assert stats['cancellation_covers'] == 3
        assert stats['noshows'] == 1
        assert stats['noshow_covers'] == 2

    def test_daily_occupation(self):
        current = [_booking(5, '12:00', 4), _booking(5, '20:00', 6)]

        stats = compute_monthly_stats(current, [], 2026, 3, capacity=20, today=date(2026, 3, 6))

        days = stats['daily_occupation']
        assert len(days) == 31
        day5 = days[4]
        assert day5['guests'] == 10
        assert day5['unoccupied'] == 10
        assert day5['occupation_rate'] == 50
        assert day5['is_past'] is True
        assert days[5]['is_today'] is True
        assert stats['max_occupation'] == 50
        assert stats['best_day']['date'] == '2026-03-05'

    def test_service_filter_and_cap(self):
        current = [_booking(5, '12:00', 4), _booking(5, '20:00', 30)]

        stats = compute_monthly_stats(current, [], 2026, 3, capacity=20, service='dinner')

        assert stats['daily_occupation'][4]['occupation_rate'] == 100
        assert stats['daily_occupation'][4]['unoccupied'] == 0

    def test_empty_month(self):
        stats = compute_monthly_stats([], [], 2026, 2, capacity=20)

        assert len(stats['daily_occupation']) == 28
        assert stats['best_day'] is None
        assert stats['top_clients'] == []

    def test_top_clients(self):
        current = [
            _booking(1, guests=2, email='x@y.ch'),
            _booking(2, guests=2, email='X@y.ch'),
            _booking(3, guests=6, email='z@y.ch'),
        ]

        top = compute_monthly_stats(current, [], 2026, 3, capacity=20)['top_clients']

        assert top[0]['email'] == 'z@y.ch'
        assert top[1]['reservation_count'] == 2
        assert top[1]['total_covers'] == 4
