"""
Tests for closed day endpoints.
"""

from conftest import future_date


class TestClosedDays:
    """Dashboard closed-day management."""

    def test_create_and_list(self, owner_client, restaurant):
        url = f'/api/closed-days/restaurant/{restaurant["id"]}'

        response = owner_client.post(url, json={'date': '2026-12-25', 'reason': 'Noël'})
        assert response.status_code == 201
        assert response.json['data']['service'] == 'all'

        owner_client.post(url, json={'date': '2027-01-01', 'service': 'lunch'})

        assert len(owner_client.get(url).json['data']) == 2
        assert len(owner_client.get(f'{url}?year=2026').json['data']) == 1
        assert len(owner_client.get(f'{url}?year=2027&month=1').json['data']) == 1
        assert owner_client.get(f'{url}?year=2027&month=2').json['data'] == []

    def test_duplicate(self, owner_client, restaurant):
        url = f'/api/closed-days/restaurant/{restaurant["id"]}'
        owner_client.post(url, json={'date': '2026-12-25'})

        response = owner_client.post(url, json={'date': '2026-12-25'})
        assert response.status_code == 400
        assert response.json['error'] == 'Ce jour est déjà fermé pour ce service'

        assert owner_client.post(url, json={'date': '2026-12-25', 'service': 'dinner'}).status_code == 201

    def test_missing_date(self, owner_client, restaurant):
        response = owner_client.post(f'/api/closed-days/restaurant/{restaurant["id"]}', json={})
        assert response.status_code == 400
        assert response.json['error'] == 'La date est requise'

    def test_invalid_values(self, owner_client, restaurant):
        url = f'/api/closed-days/restaurant/{restaurant["id"]}'
        assert owner_client.post(url, json={'date': '25.12.2026'}).status_code == 400
        assert owner_client.post(url, json={'date': '2026-12-25', 'service': 'brunch'}).status_code == 400

    def test_delete(self, owner_client, restaurant):
        created = owner_client.post(
            f'/api/closed-days/restaurant/{restaurant["id"]}', json={'date': future_date()}
        ).json['data']

        response = owner_client.delete(f'/api/closed-days/{created["id"]}')
        assert response.status_code == 200
        assert owner_client.delete(f'/api/closed-days/{created["id"]}').status_code == 404

    def test_anonymous(self, client, restaurant):
        response = client.post(f'/api/closed-days/restaurant/{restaurant["id"]}', json={'date': '2026-12-25'})
        assert response.status_code == 401
