"""
Tests for floor plan endpoints.
"""

import pytest

PLAN = {
    'zones': [{
        'id': 'z1',
        'name': 'Terrasse',
        'type': 'terrace',
        'items': [
            {'id': 't1', 'type': 'table', 'shape': 'round', 'seats': 4, 'x': 10, 'y': 20},
            {'id': 'd1', 'type': 'decor', 'decorType': 'plant', 'x': 0, 'y': 0},
        ],
    }]
}


class TestFloorPlanModel:
    """Outer-shape validation."""

    def test_valid_plan(self):
        from models.floor_plan import validate_floor_plan, get_table_ids

        assert validate_floor_plan(PLAN) is PLAN
        assert get_table_ids(PLAN) == {'t1'}

    @pytest.mark.parametrize('plan', [
        {},
        {'zones': {}},
        {'zones': [{'name': 'Sans id'}]},
        {'zones': [{'id': 'z', 'type': 'cave'}]},
        {'zones': [{'id': 'z', 'items': [{'id': 'x', 'type': 'chair'}]}]},
        {'zones': [{'id': 'z', 'items': [{'id': 'x', 'type': 'table', 'shape': 'oval'}]}]},
        {'zones': [{'id': 'z', 'items': [{'id': 'x', 'type': 'decor', 'decorType': 'piano'}]}]},
    ])
    def test_invalid_plans(self, plan):
        from models.floor_plan import validate_floor_plan

        with pytest.raises(ValueError):
            validate_floor_plan(plan)


class TestFloorPlanRoutes:
    """GET/PUT /api/floor-plans/restaurant/<id>"""

    def test_empty_by_default(self, owner_client, restaurant):
        response = owner_client.get(f'/api/floor-plans/restaurant/{restaurant["id"]}')
        assert response.json['data'] == {'zones': []}

    def test_save_and_reload(self, owner_client, restaurant):
        url = f'/api/floor-plans/restaurant/{restaurant["id"]}'

        assert owner_client.put(url, json=PLAN).status_code == 200
        assert owner_client.get(url).json['data'] == PLAN

        updated = {'zones': []}
        assert owner_client.put(url, json={'plan': updated}).status_code == 200
        assert owner_client.get(url).json['data'] == updated

    def test_missing_zones(self, owner_client, restaurant):
        response = owner_client.put(f'/api/floor-plans/restaurant/{restaurant["id"]}', json={'tables': []})
        assert response.status_code == 400
        assert response.json['error'] == 'Plan de salle invalide'

    def test_malformed_item(self, owner_client, restaurant):
        response = owner_client.put(f'/api/floor-plans/restaurant/{restaurant["id"]}', json={
            'zones': [{'id': 'z', 'items': [{'id': 'x', 'type': 'chair'}]}]
        })
        assert response.status_code == 400

    def test_anonymous(self, client, restaurant):
        assert client.get(f'/api/floor-plans/restaurant/{restaurant["id"]}').status_code == 401
