"""
garden_templates.py - Quick-start layouts applied to the active garden.

Every template fits the smallest grid (4x4) so it can be dropped onto any
garden without resizing.
"""

from collections import OrderedDict
from typing import Optional, List, Dict, Any

from models import PlacedPlant


def _template(template_id, name, emoji, description, cells):
    return {
        'id': template_id,
        'name': name,
        'emoji': emoji,
        'description': description,
        'grid_size': 4,
        'plants': [{'plant_id': pid, 'x': x, 'y': y} for pid, x, y in cells],
    }


GARDEN_TEMPLATES = OrderedDict((t['id'], t) for t in [
    _template('salsa', 'Salsa Garden', '🌶️', 'Fresh ingredients for homemade salsa', [
        ('tomato', 0, 0), ('tomato', 1, 0), ('pepper', 2, 0), ('pepper', 3, 0),
        ('cilantro', 0, 1), ('cilantro', 1, 1), ('onion', 2, 1), ('onion', 3, 1),
    ]),
    _template('salad', 'Salad Garden', '🥗', 'Fresh greens and toppings', [
        ('lettuce', 0, 0), ('lettuce', 1, 0), ('spinach', 2, 0), ('spinach', 3, 0),
        ('tomato', 0, 1), ('cucumber', 1, 1), ('radish', 2, 1), ('carrot', 3, 1),
    ]),
    _template('three-sisters', 'Three Sisters', '🌽', 'Corn, beans and squash grown together', [
        ('corn', 1, 0), ('corn', 2, 0), ('corn', 1, 1), ('corn', 2, 1),
        ('beans', 0, 0), ('beans', 3, 0),
        ('squash', 0, 2), ('squash', 1, 3), ('squash', 2, 3), ('squash', 3, 2),
    ]),
    _template('pizza', 'Pizza Garden', '🍕', 'Everything for homemade pizza', [
        ('tomato', 0, 0), ('tomato', 1, 0), ('basil', 2, 0), ('basil', 3, 0),
        ('oregano', 0, 1), ('oregano', 1, 1), ('pepper', 2, 1), ('pepper', 3, 1),
    ]),
    _template('herb-spiral', 'Herb Spiral', '🌿', 'Mediterranean herbs in a spiral', [
        ('rosemary', 0, 0), ('thyme', 1, 0), ('sage', 2, 0), ('oregano', 3, 0),
        ('basil', 0, 1), ('parsley', 1, 1), ('cilantro', 2, 1), ('dill', 3, 1),
        ('chives', 0, 2),
    ]),
    _template('strawberry-patch', 'Strawberry Patch', '🍓', 'A sweet strawberry patch', [
        ('strawberry', 0, 0), ('strawberry', 1, 0), ('strawberry', 2, 0), ('strawberry', 3, 0),
        ('strawberry', 0, 1), ('strawberry', 1, 1), ('strawberry', 2, 1), ('strawberry', 3, 1),
        ('lettuce', 0, 2), ('spinach', 1, 2), ('thyme', 2, 2), ('onion', 3, 2),
    ]),
])


def get_template(template_id: str) -> Optional[Dict[str, Any]]:
    return GARDEN_TEMPLATES.get(template_id)


def get_all_templates() -> List[Dict[str, Any]]:
    return list(GARDEN_TEMPLATES.values())


def build_template_plants(template: Dict[str, Any], planted_at: Optional[str] = None,
                          catalog=None) -> List[PlacedPlant]:
    """PlacedPlant records for a template; plants missing from *catalog* are skipped."""
    plants = []
    for cell in template['plants']:
        if catalog is not None and cell['plant_id'] not in catalog:
            continue
        plants.append(PlacedPlant(
            id=f"{cell['plant_id']}-{cell['x']}-{cell['y']}",
            plant_id=cell['plant_id'],
            x=cell['x'],
            y=cell['y'],
            planted_at=planted_at,
        ))
    return plants
