"""
garden_stats.py - Counts, family diversity and planting density of a layout.
"""

from collections import OrderedDict
from typing import Dict, Any, Sequence

from models import PlacedPlant, CATEGORIES
from plant_catalog import PLANTS, get_family_name

# (density above, score, message), checked top-down
DENSITY_SCORES = [
    (0.8, 40, 'Garden is very full, consider spacing plants more'),
    (0.6, 70, 'Good plant density'),
    (0.3, 90, 'Well-spaced garden'),
    (0.0, 60, 'Your garden has room for more plants'),
]


def _known(placed, catalog):
    return [(p, catalog[p.plant_id]) for p in placed if p.plant_id in catalog]


def get_garden_stats(placed: Sequence[PlacedPlant], catalog=None) -> Dict[str, Any]:
    """
    Plant counts for a layout.

    Returns:
        dict with keys totalPlants, uniqueCount, plantCounts (name -> count),
        categories (category -> count), families (family name -> count),
        totalSpacing (inches).
    """
    catalog = PLANTS if catalog is None else catalog
    plant_counts = OrderedDict()
    categories = OrderedDict((c, 0) for c in CATEGORIES)
    families = OrderedDict()
    total_spacing = 0

    for _, plant in _known(placed, catalog):
        plant_counts[plant.name] = plant_counts.get(plant.name, 0) + 1
        categories[plant.category] = categories.get(plant.category, 0) + 1
        if plant.family:
            name = get_family_name(plant.family)
            families[name] = families.get(name, 0) + 1
        total_spacing += plant.spacing

    return {
        'totalPlants': len(placed),
        'uniqueCount': len(plant_counts),
        'plantCounts': dict(plant_counts),
        'categories': dict(categories),
        'families': dict(families),
        'totalSpacing': total_spacing,
    }


def calculate_diversity(placed: Sequence[PlacedPlant], catalog=None) -> Dict[str, Any]:
    """
    Diversity score 0-100: half from the share of distinct crops, plus 15
    per botanical family present. Family-less plants count by category.
    """
    catalog = PLANTS if catalog is None else catalog
    known = _known(placed, catalog)
    if not known:
        return {'score': 0, 'uniqueRatio': 0, 'familyCount': 0}

    unique = {plant.id for _, plant in known}
    groups = {plant.family or plant.category for _, plant in known}
    ratio = len(unique) / len(known)
    return {
        'score': min(100, round(ratio * 50 + len(groups) * 15)),
        'uniqueRatio': round(ratio, 2),
        'familyCount': len(groups),
    }


def calculate_density(placed: Sequence[PlacedPlant], size: int) -> Dict[str, Any]:
    """Share of cells in use, scored so a moderately full grid rates best."""
    density = len(placed) / float(size * size)
    for threshold, score, message in DENSITY_SCORES:
        if density > threshold or threshold == 0.0:
            return {'density': round(density, 2), 'score': score, 'message': message}
