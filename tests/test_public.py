"""
Tests for public discovery endpoints.
"""

from conftest import future_date


def _create_restaurant(app, **overrides):
    from models.restaurant import create_restaurant

    data = {
        'name': 'Osteria Roma',
        'cuisine': 'Italien, Pizza',
        'location': '1201 Genève',
        'price_range': '$$',
        'approval_status': 'approved',
    }
    data.update(overrides)
    with app.app_context():
        return create_restaurant(data)


class TestRestaurantListing:
    """Only approved, unblocked restaurants are public."""

    def test_lists_only_visible_restaurants(self, app, client, restaurant):
        _create_restaurant(app, name='En attente', approval_status='pending')
        _create_restaurant(app, name='Bloqué', is_blocked=True)

        response = client.get('/api/public/restaurants')

        assert response.status_code == 200
        names = [r['name'] for r in response.json['data']]
        assert names == ['Le Bistrot du Lac']

    def test_json_columns_decoded(self, client, restaurant):
        data = client.get('/api/public/restaurants').json['data'][0]
        assert data['features'] == []
        assert data['opening_hours']['Lundi']['isOpen'] is True

    def test_cuisine_filter(self, app, client, restaurant):
        _create_restaurant(app)

        response = client.get('/api/public/restaurants?cuisine=pizza')
        assert [r['name'] for r in response.json['data']] == ['Osteria Roma']

    def test_text_search(self, app, client, restaurant):
        _create_restaurant(app)

        response = client.get('/api/public/restaurants?q=lac')
        assert [r['name'] for r in response.json['data']] == ['Le Bistrot du Lac']

    def test_compatibility_route(self, client, restaurant):
        response = client.get('/api/restaurants')
        assert response.status_code == 200
        assert len(response.json['data']) == 1


class TestRestaurantDetail:
    """Single public restaurant."""

    def test_detail(self, client, restaurant):
        response = client.get(f'/api/public/restaurants/{restaurant["id"]}')
        assert response.status_code == 200
        assert response.json['data']['name'] == 'Le Bistrot du Lac'

    def test_pending_restaurant_hidden(self, app, client):
        restaurant_id = _create_restaurant(app, approval_status='pending')
        assert client.get(f'/api/public/restaurants/{restaurant_id}').status_code == 404
        assert client.get(f'/api/restaurants/{restaurant_id}').status_code == 404

    def test_unknown_restaurant(self, client):
        assert client.get('/api/public/restaurants/999').status_code == 404

    def test_opening_hours(self, client, restaurant):
        response = client.get(f'/api/public/restaurants/{restaurant["id"]}/opening-hours')
        assert response.json['opening_hours']['Dimanche']['closeTime2'] == '22:30'

    def test_opening_hours_null(self, app, client):
        restaurant_id = _create_restaurant(app)
        response = client.get(f'/api/public/restaurants/{restaurant_id}/opening-hours')
        assert response.status_code == 200
        assert response.json['opening_hours'] is None

    def test_closed_days(self, app, client, restaurant):
        from models.closed_day import create_closed_day

        with app.app_context():
            create_closed_day(restaurant['id'], future_date(10), 'all', 'Vacances')

        response = client.get(f'/api/public/restaurants/{restaurant["id"]}/closed-days')
        assert [d['reason'] for d in response.json['data']] == ['Vacances']


class TestTimeSlots:
    """Bookable slots endpoint."""

    def test_time_slots(self, client, restaurant):
        date_str = future_date()
        response = client.get(f'/api/public/restaurants/{restaurant["id"]}/time-slots?date={date_str}')

        assert response.status_code == 200
        data = response.json['data']
        assert data['date'] == date_str
        assert data['lunch'][0] == '11:30'
        assert '21:30' in data['dinner']
        assert data['closed'] is False

    def test_time_slots_closed_service(self, app, client, restaurant):
        from models.closed_day import create_closed_day

        date_str = future_date()
        with app.app_context():
            create_closed_day(restaurant['id'], date_str, 'lunch')

        data = client.get(f'/api/public/restaurants/{restaurant["id"]}/time-slots?date={date_str}').json['data']
        assert data['lunch'] == []
        assert data['dinner']

    def test_time_slots_requires_date(self, client, restaurant):
        response = client.get(f'/api/public/restaurants/{restaurant["id"]}/time-slots')
        assert response.status_code == 400


class TestCuisineCategories:
    """Seeded cuisine categories."""

    def test_categories(self, client):
        response = client.get('/api/public/cuisine-categories')
        names = [c['name'] for c in response.json['data']]
        assert 'Italien' in names
        assert len(names) == 15

    def test_compatibility_route(self, client):
        assert client.get('/api/cuisine-categories').status_code == 200
