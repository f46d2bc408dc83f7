"""
planting_calendar.py - Planting schedule derived from USDA zone frost dates.

For every distinct plant in a garden, computes from the zone's last frost:
- start-indoors:  last_frost - start_indoors_weeks
- transplant:     last_frost + transplant_weeks
- direct-sow:     last_frost (only when neither of the above applies)
- harvest:        transplant (or last frost) + days_to_maturity

Also generates succession planting dates for quick crops sown in waves.
"""

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, List, Dict, Any, Iterable

from models import Plant
from plant_catalog import PLANTS, get_zone_data


EVENT_TYPES = ('start-indoors', 'transplant', 'direct-sow', 'harvest')

EVENT_LABELS = {
    'start-indoors': 'Start indoors',
    'transplant': 'Transplant outside',
    'direct-sow': 'Direct sow',
    'harvest': 'Expected harvest',
}


@dataclass(frozen=True)
class CalendarEvent:
    plant_id: str
    plant_name: str
    type: str
    date: date
    week: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'plantId': self.plant_id,
            'plantName': self.plant_name,
            'type': self.type,
            'label': EVENT_LABELS[self.type],
            'date': self.date.isoformat(),
            'week': self.week,
        }


def get_last_frost(zone: int, year: int) -> Optional[date]:
    """Last spring frost date for a zone in a given year, or None for unknown zones."""
    zone_data = get_zone_data(zone)
    if zone_data is None:
        return None
    month, day = zone_data['last_frost']
    return date(year, month, day)


def get_first_frost(zone: int, year: int) -> Optional[date]:
    """First fall frost date for a zone in a given year."""
    zone_data = get_zone_data(zone)
    if zone_data is None:
        return None
    month, day = zone_data['first_frost']
    return date(year, month, day)


def _distinct(plant_ids: Iterable[str]) -> List[str]:
    seen = []
    for plant_id in plant_ids:
        if plant_id not in seen:
            seen.append(plant_id)
    return seen


def plant_events(plant: Plant, last_frost: date) -> List[CalendarEvent]:
    """Events for a single plant, in start/transplant/sow/harvest order."""
    events = []

    if plant.start_indoors_weeks > 0:
        events.append(CalendarEvent(
            plant.id, plant.name, 'start-indoors',
            last_frost - timedelta(days=plant.start_indoors_weeks * 7),
            plant.start_indoors_weeks,
        ))

    if plant.transplant_weeks > 0:
        events.append(CalendarEvent(
            plant.id, plant.name, 'transplant',
            last_frost + timedelta(days=plant.transplant_weeks * 7),
            plant.transplant_weeks,
        ))

    if plant.start_indoors_weeks == 0 and plant.transplant_weeks == 0:
        events.append(CalendarEvent(plant.id, plant.name, 'direct-sow', last_frost, 0))

    if plant.transplant_weeks > 0:
        harvest_offset = plant.transplant_weeks * 7 + plant.days_to_maturity
    else:
        harvest_offset = plant.days_to_maturity
    events.append(CalendarEvent(
        plant.id, plant.name, 'harvest',
        last_frost + timedelta(days=harvest_offset),
        plant.transplant_weeks + math.ceil(plant.days_to_maturity / 7),
    ))

    return events


def compute_calendar_events(plant_ids: Iterable[str], zone: int, year: Optional[int] = None,
                            catalog=None) -> List[CalendarEvent]:
    """
    Build the sorted planting calendar for the distinct plants of a garden.

    Args:
        plant_ids: Plant ids present in the garden (duplicates allowed).
        zone: USDA zone 3-11.
        year: Calendar year for date construction (defaults to today's year).
        catalog: Mapping of plant id -> Plant.

    Returns:
        Events of every known plant, sorted ascending by date. Unknown plant
        ids and unknown zones yield no events.
    """
    catalog = PLANTS if catalog is None else catalog
    if year is None:
        year = date.today().year

    last_frost = get_last_frost(zone, year)
    if last_frost is None:
        return []

    events = []
    for plant_id in _distinct(plant_ids):
        plant = catalog.get(plant_id)
        if plant is None:
            continue
        events.extend(plant_events(plant, last_frost))

    events.sort(key=lambda e: e.date)
    return events


# ========================================
# Succession Planting
# ========================================

# interval in days between sowings
SUCCESSION_PLANTING = {
    'lettuce': {'interval': 14, 'description': 'Plant every 2 weeks for continuous harvest', 'seasons': ['spring', 'fall']},
    'radish': {'interval': 10, 'description': 'Plant every 10 days for constant supply', 'seasons': ['spring', 'fall']},
    'beans': {'interval': 14, 'description': 'Plant every 2 weeks for extended harvest', 'seasons': ['summer']},
    'peas': {'interval': 14, 'description': 'Plant every 2 weeks for continuous harvest', 'seasons': ['spring', 'fall']},
    'carrot': {'interval': 21, 'description': 'Plant every 3 weeks for steady supply', 'seasons': ['spring', 'fall']},
    'beet': {'interval': 21, 'description': 'Plant every 3 weeks for continuous harvest', 'seasons': ['spring', 'fall']},
    'spinach': {'interval': 14, 'description': 'Plant every 2 weeks for extended harvest', 'seasons': ['spring', 'fall']},
    'cucumber': {'interval': 21, 'description': 'Plant every 3 weeks for prolonged harvest', 'seasons': ['summer']},
    'zucchini': {'interval': 30, 'description': 'Plant every 4 weeks for consistent harvest', 'seasons': ['summer']},
    'basil': {'interval': 21, 'description': 'Plant every 3 weeks for fresh supply', 'seasons': ['summer']},
    'cilantro': {'interval': 14, 'description': 'Plant every 2 weeks as it bolts quickly', 'seasons': ['spring', 'fall']},
    'scallion': {'interval': 21, 'description': 'Plant every 3 weeks for continuous harvest', 'seasons': ['spring', 'summer', 'fall']},
}

SEASONS = ('spring', 'summer', 'fall')


def get_season_windows(zone: int, year: int) -> Dict[str, tuple]:
    """(start, end) sowing window per season, anchored on the zone's frost dates."""
    last_frost = get_last_frost(zone, year)
    first_frost = get_first_frost(zone, year)
    if last_frost is None or first_frost is None:
        return {}
    return {
        'spring': (last_frost, last_frost + timedelta(days=60)),
        'summer': (last_frost + timedelta(days=30), first_frost - timedelta(days=60)),
        'fall': (first_frost - timedelta(days=90), first_frost - timedelta(days=30)),
    }


def generate_succession_dates(zone: int, seasons: Iterable[str], interval: int, year: int,
                              today: Optional[date] = None) -> List[date]:
    """Sowing dates every *interval* days through each season window."""
    windows = get_season_windows(zone, year)
    dates = set()
    for season in seasons:
        window = windows.get(season)
        if window is None:
            continue
        start, end = window
        current = start
        while current <= end:
            if today is None or current >= today:
                dates.add(current)
            current += timedelta(days=interval)
    return sorted(dates)


def get_succession_schedule(plant_ids: Iterable[str], zone: int, year: Optional[int] = None,
                            today: Optional[date] = None, season: Optional[str] = None,
                            catalog=None) -> List[Dict[str, Any]]:
    """
    Succession planting plan for the garden's plants that benefit from it.

    Args:
        plant_ids: Plant ids present in the garden.
        zone: USDA zone.
        year: Calendar year (defaults to today's year).
        today: When given, only dates on or after it are listed.
        season: Restrict to plants sown in this season ('spring', 'summer', 'fall').
        catalog: Mapping of plant id -> Plant.

    Returns:
        List of dicts: plantId, plantName, interval, description, seasons, plantingDates.
    """
    catalog = PLANTS if catalog is None else catalog
    if year is None:
        year = date.today().year

    schedule = []
    for plant_id in _distinct(plant_ids):
        info = SUCCESSION_PLANTING.get(plant_id)
        plant = catalog.get(plant_id)
        if info is None or plant is None:
            continue
        if season and season not in info['seasons']:
            continue

        dates = generate_succession_dates(zone, info['seasons'], info['interval'], year, today)
        schedule.append({
            'plantId': plant_id,
            'plantName': plant.name,
            'interval': info['interval'],
            'description': info['description'],
            'seasons': list(info['seasons']),
            'plantingDates': [d.isoformat() for d in dates],
        })
    return schedule
