"""
Tests for client endpoints.
"""

from conftest import future_date, login


def _client_record(app, restaurant_id, email='jean.martin@bluewin.ch', phone='079 555 55 55'):
    from models.client import upsert_client_from_booking

    with app.app_context():
        return upsert_client_from_booking(restaurant_id, 'Jean', 'Martin', email, phone)


class TestClientModel:
    """Client records built from bookings."""

    def test_upsert_matches_phone_ignoring_spaces(self, app, restaurant):
        first = _client_record(app, restaurant['id'])
        second = _client_record(app, restaurant['id'], email='nouveau@bluewin.ch', phone='0795555555')

        assert second['id'] == first['id']
        assert second['email'] == 'nouveau@bluewin.ch'

    def test_upsert_matches_email_and_name(self, app, restaurant):
        first = _client_record(app, restaurant['id'], phone='')
        second = _client_record(app, restaurant['id'], email='JEAN.MARTIN@bluewin.ch', phone='')
        assert second['id'] == first['id']

    def test_separate_restaurants(self, app, restaurant):
        from models.restaurant import create_restaurant

        with app.app_context():
            other_id = create_restaurant({'name': 'B', 'cuisine': 'Suisse', 'location': 'Bulle', 'price_range': '$'})
        first = _client_record(app, restaurant['id'])
        second = _client_record(app, other_id)
        assert first['id'] != second['id']


class TestClientRoutes:
    """Dashboard client listing, detail and notes."""

    def test_list_with_stats(self, app, owner_client, client, booking_payload, restaurant):
        client.post('/api/bookings', json=booking_payload)

        response = owner_client.get(f'/api/clients/restaurant/{restaurant["id"]}')

        assert response.status_code == 200
        data = response.json['data']
        assert len(data) == 1
        assert data[0]['email'] == 'marie.dupont@gmail.com'
        assert data[0]['visit_count'] == 1
        assert data[0]['avg_guests'] == 2

    def test_search(self, app, owner_client, restaurant):
        _client_record(app, restaurant['id'])
        url = f'/api/clients/restaurant/{restaurant["id"]}'

        assert len(owner_client.get(f'{url}?search=mart').json['data']) == 1
        assert owner_client.get(f'{url}?search=zzz').json['data'] == []

    def test_detail(self, app, owner_client, client, booking_payload, restaurant):
        client.post('/api/bookings', json=booking_payload)
        with app.app_context():
            from models.client import get_client_by_email
            record = get_client_by_email(restaurant['id'], 'marie.dupont@gmail.com')

        response = owner_client.get(f'/api/clients/{record["id"]}')

        assert response.status_code == 200
        data = response.json['data']
        assert len(data['bookings']) == 1
        assert data['total_spent'] == 0

    def test_phone_only_clients_stay_separate(self, owner_client, restaurant):
        for first_name, phone, guests in (('Luc', '079 111 11 11', 2), ('Eva', '079 222 22 22', 5)):
            response = owner_client.post('/api/bookings/owner', json={
                'restaurant_id': restaurant['id'], 'date': future_date(), 'time': '12:00',
                'guests': guests, 'first_name': first_name, 'last_name': 'Rochat', 'phone': phone,
            })
            assert response.status_code == 201

        data = owner_client.get(f'/api/clients/restaurant/{restaurant["id"]}').json['data']

        assert sorted(c['first_name'] for c in data) == ['Eva', 'Luc']
        assert all(c['visit_count'] == 1 for c in data)
        eva = next(c for c in data if c['first_name'] == 'Eva')
        assert eva['avg_guests'] == 5

        detail = owner_client.get(f'/api/clients/{eva["id"]}').json['data']
        assert [b['phone'] for b in detail['bookings']] == ['079 222 22 22']

    def test_detail_not_found(self, owner_client):
        assert owner_client.get('/api/clients/999').status_code == 404

    def test_update_notes_and_tags(self, app, owner_client, restaurant):
        record = _client_record(app, restaurant['id'])

        response = owner_client.patch(f'/api/clients/{record["id"]}', json={
            'notes': 'Allergie aux noix',
            'tags': ['VIP', ' ', 'Habitué'],
        })

        assert response.status_code == 200
        assert response.json['data']['notes'] == 'Allergie aux noix'
        assert response.json['data']['tags'] == ['VIP', 'Habitué']

    def test_update_without_fields(self, app, owner_client, restaurant):
        record = _client_record(app, restaurant['id'])
        response = owner_client.patch(f'/api/clients/{record["id"]}', json={'email': 'x@y.ch'})
        assert response.status_code == 400

    def test_update_tags_not_list(self, app, owner_client, restaurant):
        record = _client_record(app, restaurant['id'])
        response = owner_client.patch(f'/api/clients/{record["id"]}', json={'tags': 'VIP'})
        assert response.status_code == 400

    def test_other_user_forbidden(self, app, restaurant):
        from models.user import create_user

        record = _client_record(app, restaurant['id'])
        with app.app_context():
            create_user('intrus@resto.ch', 'intrus123')
        intruder = app.test_client()
        login(intruder, 'intrus@resto.ch', 'intrus123')

        assert intruder.get(f'/api/clients/{record["id"]}').status_code == 403
        assert intruder.get(f'/api/clients/restaurant/{restaurant["id"]}').status_code == 403
