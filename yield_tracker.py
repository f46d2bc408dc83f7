"""
yield_tracker.py - Expected yields and harvest totals.

Expected yield for a crop is its per-plant amount times the number of
cells it occupies. The per-plant amount comes from the garden's own
expectation when one is set, otherwise from DEFAULT_YIELDS. Harvest logs
are summed per crop and set against that expectation.
"""

from collections import OrderedDict
from typing import Optional, List, Dict, Any, Iterable, Mapping, Sequence

from models import PlacedPlant, HarvestLog
from plant_catalog import PLANTS


# Approximate season yield of one plant
DEFAULT_YIELDS = {
    'tomato': {'yield': 10, 'unit': 'lbs'},
    'pepper': {'yield': 5, 'unit': 'lbs'},
    'eggplant': {'yield': 4, 'unit': 'lbs'},
    'potato': {'yield': 2, 'unit': 'lbs'},
    'cucumber': {'yield': 8, 'unit': 'lbs'},
    'zucchini': {'yield': 8, 'unit': 'lbs'},
    'squash': {'yield': 6, 'unit': 'lbs'},
    'pumpkin': {'yield': 15, 'unit': 'lbs'},
    'lettuce': {'yield': 0.5, 'unit': 'lbs'},
    'spinach': {'yield': 0.3, 'unit': 'lbs'},
    'kale': {'yield': 1, 'unit': 'lbs'},
    'broccoli': {'yield': 1, 'unit': 'lbs'},
    'cabbage': {'yield': 2, 'unit': 'lbs'},
    'cauliflower': {'yield': 1.5, 'unit': 'lbs'},
    'radish': {'yield': 0.1, 'unit': 'lbs'},
    'carrot': {'yield': 0.25, 'unit': 'lbs'},
    'beet': {'yield': 0.25, 'unit': 'lbs'},
    'onion': {'yield': 0.3, 'unit': 'lbs'},
    'garlic': {'yield': 0.1, 'unit': 'lbs'},
    'corn': {'yield': 2, 'unit': 'ears'},
    'beans': {'yield': 0.5, 'unit': 'lbs'},
    'peas': {'yield': 0.3, 'unit': 'lbs'},
    'celery': {'yield': 1, 'unit': 'lbs'},
    'basil': {'yield': 0.25, 'unit': 'lbs'},
    'mint': {'yield': 0.5, 'unit': 'lbs'},
    'parsley': {'yield': 0.2, 'unit': 'lbs'},
    'cilantro': {'yield': 0.1, 'unit': 'lbs'},
    'rosemary': {'yield': 0.3, 'unit': 'lbs'},
    'thyme': {'yield': 0.2, 'unit': 'lbs'},
    'strawberry': {'yield': 1, 'unit': 'lbs'},
    'watermelon': {'yield': 20, 'unit': 'lbs'},
    'cantaloupe': {'yield': 8, 'unit': 'lbs'},
    'blueberry': {'yield': 2, 'unit': 'lbs'},
    'raspberry': {'yield': 2, 'unit': 'lbs'},
}

FALLBACK_YIELD = {'yield': 1, 'unit': 'lbs'}


def get_default_yield(plant_id: str) -> Dict[str, Any]:
    """Per-plant yield for a crop; unknown crops get 1 lb."""
    return dict(DEFAULT_YIELDS.get(plant_id, FALLBACK_YIELD))


def _per_plant_yield(plant_id, expectations):
    expectation = (expectations or {}).get(plant_id)
    if expectation:
        return dict(expectation)
    return get_default_yield(plant_id)


def calculate_expected_yields(placed: Sequence[PlacedPlant],
                              expectations: Optional[Mapping[str, Dict[str, Any]]] = None,
                              catalog=None) -> List[Dict[str, Any]]:
    """
    Expected season yield for every crop on the grid.

    Args:
        placed: Placed plants of one garden.
        expectations: Optional per-crop overrides, plant id -> {yield, unit}.
        catalog: Plant catalog (defaults to PLANTS).

    Returns:
        One dict per crop, in order of first appearance on the grid, with
        keys plantId, plantName, emoji, count, perPlant, unit, expected.
        Plants missing from the catalog are skipped.
    """
    catalog = PLANTS if catalog is None else catalog
    counts = OrderedDict()
    for p in placed:
        if p.plant_id in catalog:
            counts[p.plant_id] = counts.get(p.plant_id, 0) + 1

    rows = []
    for plant_id, count in counts.items():
        plant = catalog[plant_id]
        per_plant = _per_plant_yield(plant_id, expectations)
        rows.append({
            'plantId': plant_id,
            'plantName': plant.name,
            'emoji': plant.emoji,
            'count': count,
            'perPlant': per_plant['yield'],
            'unit': per_plant['unit'],
            'expected': round(per_plant['yield'] * count, 2),
        })
    return rows


def summarize_harvests(placed: Sequence[PlacedPlant], harvest_logs: Iterable[HarvestLog],
                       expectations: Optional[Mapping[str, Dict[str, Any]]] = None,
                       catalog=None) -> Dict[str, Any]:
    """
    Expected versus actual yield per crop and for the whole garden.

    Crops that were harvested but are no longer on the grid still show up,
    with an expected yield of 0.

    Returns:
        dict with keys plants (list of {plantId, plantName, emoji, unit,
        expected, actual}), totalExpected, totalActual.
    """
    catalog = PLANTS if catalog is None else catalog
    per_crop = OrderedDict()
    for row in calculate_expected_yields(placed, expectations, catalog):
        per_crop[row['plantId']] = {
            'plantId': row['plantId'],
            'plantName': row['plantName'],
            'emoji': row['emoji'],
            'unit': row['unit'],
            'expected': row['expected'],
            'actual': 0,
        }

    for log in harvest_logs:
        plant = catalog.get(log.plant_id)
        if plant is None:
            continue
        if log.plant_id not in per_crop:
            per_crop[log.plant_id] = {
                'plantId': log.plant_id,
                'plantName': plant.name,
                'emoji': plant.emoji,
                'unit': log.unit,
                'expected': 0,
                'actual': 0,
            }
        per_crop[log.plant_id]['actual'] += log.quantity

    plants = list(per_crop.values())
    for row in plants:
        row['actual'] = round(row['actual'], 2)

    return {
        'plants': plants,
        'totalExpected': round(sum(r['expected'] for r in plants), 2),
        'totalActual': round(sum(r['actual'] for r in plants), 2),
    }
