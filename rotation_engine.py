"""
rotation_engine.py - Crop rotation tracking for a garden grid.

This module implements:
- Yearly snapshots: which plant family occupied each cell in a given year
- Rotation warnings: same family back in the same cell within the window
- Follow-up suggestions: families that do well after the ones planted now

Algorithm details:
- History format: {"2024": ["2-3:nightshade", "0-0:legume", ...]}
- Saving a year overwrites that year's entries entirely
- One entry per cell per year; the first plant found for a cell wins
- A warning is raised when current_year - recorded_year < ROTATION_WINDOW_YEARS
- Plants without a family tag are never tracked
"""

from collections import OrderedDict
from datetime import date
from typing import Optional, List, Dict, Any

from models import Garden
from plant_catalog import PLANTS, FAMILY_FOLLOWERS, get_family_name


ROTATION_WINDOW_YEARS = 3


def get_plant_family(plant_id: str, catalog=None) -> Optional[str]:
    """Return the rotation family of a plant id, or None if untracked."""
    catalog = PLANTS if catalog is None else catalog
    plant = catalog.get(plant_id)
    return plant.family if plant else None


def parse_history_entry(entry: str):
    """
    Split a "x-y:family" history entry.

    Returns:
        (cell_key, family), or (None, None) if the entry is malformed.
    """
    cell_key, sep, family = entry.partition(':')
    if not sep or not cell_key or not family:
        return None, None
    return cell_key, family


def save_to_rotation_history(garden: Garden, year, catalog=None) -> List[str]:
    """
    Snapshot the garden's current families into its rotation history.

    Args:
        garden: Garden whose rotation_history is updated in place.
        year: Year key (int or str).
        catalog: Mapping of plant id -> Plant.

    Returns:
        The list of "x-y:family" entries stored for that year.
    """
    cell_families = OrderedDict()
    for placed in garden.plants:
        family = get_plant_family(placed.plant_id, catalog)
        if not family:
            continue
        cell_key = placed.cell_key
        if cell_key not in cell_families:
            cell_families[cell_key] = family

    entries = [f"{cell_key}:{family}" for cell_key, family in cell_families.items()]
    garden.rotation_history[str(year)] = entries
    return entries


def get_rotation_warnings(garden: Garden, current_year: Optional[int] = None,
                          catalog=None) -> List[Dict[str, Any]]:
    """
    Flag plants whose family occupied the same cell too recently.

    One warning is emitted per (placed plant, qualifying year); several
    recent years for the same cell produce several warnings.

    Args:
        garden: Garden with plants and rotation_history.
        current_year: Year to compare against (defaults to today's year).
        catalog: Mapping of plant id -> Plant.

    Returns:
        List of dicts with keys: x, y, plantId, family, years, message.
    """
    catalog = PLANTS if catalog is None else catalog
    if current_year is None:
        current_year = date.today().year

    # year -> {cell_key: family}, built once instead of per plant
    history_by_year = []
    for year_key, entries in garden.rotation_history.items():
        try:
            recorded_year = int(year_key)
        except (TypeError, ValueError):
            continue
        cells = {}
        for entry in entries:
            cell_key, family = parse_history_entry(entry)
            if cell_key is not None and cell_key not in cells:
                cells[cell_key] = family
        history_by_year.append((recorded_year, cells))

    warnings = []
    for placed in garden.plants:
        plant = catalog.get(placed.plant_id)
        if plant is None or not plant.family:
            continue

        for recorded_year, cells in history_by_year:
            if cells.get(placed.cell_key) != plant.family:
                continue
            if current_year - recorded_year >= ROTATION_WINDOW_YEARS:
                continue

            family_name = get_family_name(plant.family)
            warnings.append({
                'x': placed.x,
                'y': placed.y,
                'plantId': placed.plant_id,
                'family': plant.family,
                'years': [recorded_year],
                'message': (
                    f"{plant.name} is a {family_name} crop, and the same family grew here "
                    f"in {recorded_year}. Wait {ROTATION_WINDOW_YEARS} years before "
                    f"replanting this family in the same spot."
                ),
            })

    return warnings


def get_rotation_suggestions(garden: Garden, catalog=None) -> List[Dict[str, Any]]:
    """
    Suggest follow-up families for each family currently in the garden.

    Returns:
        One dict per distinct family (first-seen order) with keys:
        family, familyName, plantIds, goodFollowers.
    """
    catalog = PLANTS if catalog is None else catalog

    families = OrderedDict()
    for placed in garden.plants:
        family = get_plant_family(placed.plant_id, catalog)
        if not family:
            continue
        plant_ids = families.setdefault(family, [])
        if placed.plant_id not in plant_ids:
            plant_ids.append(placed.plant_id)

    suggestions = []
    for family, plant_ids in families.items():
        followers = FAMILY_FOLLOWERS.get(family, [])
        suggestions.append({
            'family': family,
            'familyName': get_family_name(family),
            'plantIds': plant_ids,
            'goodFollowers': [
                {'family': f, 'familyName': get_family_name(f)} for f in followers
            ],
        })
    return suggestions


def clear_rotation_history(garden: Garden):
    """Drop every recorded year."""
    garden.rotation_history = {}
