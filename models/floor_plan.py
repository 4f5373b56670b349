"""
Floor plan data access functions.

A floor plan is stored per restaurant as a JSON document::

    {"zones": [{"id": "...", "name": "Salle", "type": "indoor",
                "items": [{"id": "t1", "type": "table", ...},
                          {"id": "d1", "type": "decor", "decorType": "bar", ...}]}]}

Only the outer shape is validated; the layout itself belongs to the editor.
"""

from database import get_db
from utils.helpers import load_json, dump_json

ZONE_TYPES = ('indoor', 'terrace', 'floor')
ITEM_TYPES = ('table', 'decor')
TABLE_SHAPES = ('square', 'round', 'rectangle')
DECOR_TYPES = ('door', 'plant', 'bar', 'wall', 'window')


def empty_plan() -> dict:
    return {'zones': []}


def validate_floor_plan(plan) -> dict:
    """
    Validate the outer shape of a floor plan document.

    Args:
        plan: Decoded JSON document

    Returns:
        The plan

    Raises:
        ValueError: If zones or items are malformed
    """
    if not isinstance(plan, dict) or not isinstance(plan.get('zones'), list):
        raise ValueError('Plan de salle invalide')

    for zone in plan['zones']:
        if not isinstance(zone, dict) or not zone.get('id'):
            raise ValueError('Zone invalide dans le plan de salle')
        if zone.get('type', 'indoor') not in ZONE_TYPES:
            raise ValueError(f'Type de zone invalide: {zone.get("type")}')

        items = zone.get('items', [])
        if not isinstance(items, list):
            raise ValueError('Éléments de zone invalides')

        for item in items:
            if not isinstance(item, dict) or not item.get('id'):
                raise ValueError('Élément invalide dans le plan de salle')
            if item.get('type') not in ITEM_TYPES:
                raise ValueError(f'Type d\'élément invalide: {item.get("type")}')
            if item['type'] == 'table' and item.get('shape', 'square') not in TABLE_SHAPES:
                raise ValueError(f'Forme de table invalide: {item.get("shape")}')
            if item['type'] == 'decor' and item.get('decorType') not in DECOR_TYPES:
                raise ValueError(f'Type de décor invalide: {item.get("decorType")}')

    return plan


def get_floor_plan(restaurant_id: int) -> dict | None:
    """
    Get the saved floor plan of a restaurant.

    Args:
        restaurant_id: Restaurant ID

    Returns:
        Plan document, or None when nothing is saved
    """
    db = get_db()
    row = db.execute('SELECT plan FROM floor_plans WHERE restaurant_id = ?',
                     (restaurant_id,)).fetchone()
    if not row:
        return None
    return load_json(row['plan'], empty_plan())


def save_floor_plan(restaurant_id: int, plan: dict) -> dict:
    """
    Insert or replace the floor plan of a restaurant.

    Args:
        restaurant_id: Restaurant ID
        plan: Plan document

    Returns:
        The saved plan

    Raises:
        ValueError: If the plan is malformed
    """
    validate_floor_plan(plan)

    db = get_db()
    db.execute('''
        INSERT INTO floor_plans (restaurant_id, plan, updated_at)
        VALUES (?, ?, CURRENT_TIMESTAMP)
        ON CONFLICT(restaurant_id) DO UPDATE SET
            plan = excluded.plan,
            updated_at = CURRENT_TIMESTAMP
    ''', (restaurant_id, dump_json(plan)))
    db.commit()
    return plan


def get_table_ids(plan: dict | None) -> set:
    """Collect the IDs of every table item in a plan."""
    if not plan:
        return set()
    return {
        str(item.get('id'))
        for zone in plan.get('zones', [])
        for item in zone.get('items', [])
        if item.get('type') == 'table'
    }


def table_exists(restaurant_id: int, table_id: str) -> bool:
    """
    Check a table ID against the saved floor plan.

    Returns:
        True if the table exists, or if no plan has been saved yet
    """
    plan = get_floor_plan(restaurant_id)
    if plan is None:
        return True
    return str(table_id) in get_table_ids(plan)
