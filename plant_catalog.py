"""
plant_catalog.py - Static reference data for the garden grid.

Holds:
- The plant catalog (id -> Plant) with spacing, timing and companion data
- Botanical family tags used for crop rotation
- The good-follower table (which families should follow which)
- USDA hardiness zones 3-11 with their average frost dates

Everything here is read-only lookup data. Calculators accept an optional
``catalog`` mapping so tests can substitute their own plants; when omitted
they fall back to PLANTS.
"""

from collections import OrderedDict
from typing import Optional, List, Dict, Any, Mapping

from models import Plant


def _plant(plant_id, name, emoji, category, spacing, days, family,
           sun='full', water='medium', companions=(), antagonists=(),
           indoors=0, transplant=0):
    return Plant(
        id=plant_id,
        name=name,
        emoji=emoji,
        category=category,
        spacing=spacing,
        days_to_maturity=days,
        sun_needs=sun,
        water_needs=water,
        companions=frozenset(companions),
        antagonists=frozenset(antagonists),
        start_indoors_weeks=indoors,
        transplant_weeks=transplant,
        family=family,
    )


# ========================================
# Plant Families
# ========================================

PLANT_FAMILIES = OrderedDict([
    ('nightshade', {'name': 'Nightshades (Solanaceae)', 'emoji': '🍅'}),
    ('cucurbit', {'name': 'Cucurbits (Cucurbitaceae)', 'emoji': '🥒'}),
    ('brassica', {'name': 'Brassicas (Brassicaceae)', 'emoji': '🥦'}),
    ('allium', {'name': 'Alliums (Amaryllidaceae)', 'emoji': '🧅'}),
    ('legume', {'name': 'Legumes (Fabaceae)', 'emoji': '🫘'}),
    ('umbellifer', {'name': 'Umbellifers (Apiaceae)', 'emoji': '🥕'}),
    ('aster', {'name': 'Asters (Asteraceae)', 'emoji': '🌼'}),
    ('amaranth', {'name': 'Amaranths (Amaranthaceae)', 'emoji': '🥬'}),
    ('mint', {'name': 'Mints (Lamiaceae)', 'emoji': '🌿'}),
    ('grass', {'name': 'Grasses (Poaceae)', 'emoji': '🌽'}),
    ('fruit', {'name': 'Perennial fruits', 'emoji': '🍓'}),
])

# Families that do well in a cell after the key family
FAMILY_FOLLOWERS = {
    'nightshade': ['legume', 'cucurbit', 'brassica'],
    'cucurbit': ['legume', 'allium', 'brassica'],
    'brassica': ['legume', 'allium', 'umbellifer'],
    'allium': ['legume', 'brassica', 'nightshade'],
    'legume': ['brassica', 'nightshade', 'cucurbit', 'grass'],
    'umbellifer': ['legume', 'nightshade', 'allium'],
    'aster': ['legume', 'brassica'],
    'amaranth': ['legume', 'nightshade', 'cucurbit'],
    'grass': ['legume', 'brassica'],
}


# ========================================
# Plant Catalog
# ========================================

_PLANT_LIST = [
    # Vegetables
    _plant('tomato', 'Tomato', '🍅', 'vegetable', 18, 80, 'nightshade', water='high',
           companions=['carrot', 'parsley', 'marigold', 'nasturtium', 'asparagus'],
           antagonists=['potato', 'corn', 'cabbage', 'kale', 'onion', 'fennel'],
           indoors=6, transplant=2),
    _plant('pepper', 'Pepper', '🫑', 'vegetable', 12, 75, 'nightshade',
           companions=['basil', 'onion', 'carrot', 'marigold'],
           antagonists=['beans', 'fennel'],
           indoors=8, transplant=2),
    _plant('eggplant', 'Eggplant', '🍆', 'vegetable', 18, 80, 'nightshade',
           companions=['beans', 'marigold', 'thyme'],
           antagonists=['fennel'],
           indoors=8, transplant=3),
    _plant('potato', 'Potato', '🥔', 'vegetable', 12, 90, 'nightshade',
           companions=['beans', 'corn', 'cabbage', 'marigold'],
           antagonists=['tomato', 'cucumber', 'squash', 'pumpkin', 'sunflower']),
    _plant('cucumber', 'Cucumber', '🥒', 'vegetable', 12, 55, 'cucurbit', water='high',
           companions=['beans', 'peas', 'radish', 'dill', 'sunflower', 'nasturtium'],
           antagonists=['potato', 'sage'],
           indoors=3, transplant=2),
    _plant('zucchini', 'Zucchini', '🥒', 'vegetable', 24, 50, 'cucurbit', water='high',
           companions=['beans', 'corn', 'nasturtium', 'marigold'],
           antagonists=['potato']),
    _plant('squash', 'Squash', '🎃', 'vegetable', 24, 60, 'cucurbit',
           companions=['corn', 'beans', 'nasturtium', 'marigold'],
           antagonists=['potato']),
    _plant('pumpkin', 'Pumpkin', '🎃', 'vegetable', 36, 110, 'cucurbit', water='high',
           companions=['corn', 'beans', 'marigold'],
           antagonists=['potato']),
    _plant('lettuce', 'Lettuce', '🥬', 'vegetable', 6, 45, 'aster', sun='partial',
           companions=['carrot', 'radish', 'strawberry', 'chives', 'onion'],
           antagonists=['celery', 'parsley']),
    _plant('spinach', 'Spinach', '🥬', 'vegetable', 4, 40, 'amaranth', sun='partial',
           companions=['strawberry', 'peas', 'radish'],
           antagonists=['potato']),
    _plant('kale', 'Kale', '🥬', 'vegetable', 12, 55, 'brassica',
           companions=['beet', 'celery', 'dill', 'onion', 'potato'],
           antagonists=['strawberry', 'tomato'],
           indoors=4),
    _plant('broccoli', 'Broccoli', '🥦', 'vegetable', 18, 70, 'brassica',
           companions=['onion', 'dill', 'celery', 'potato', 'rosemary'],
           antagonists=['tomato', 'strawberry', 'pepper'],
           indoors=6),
    _plant('cabbage', 'Cabbage', '🥬', 'vegetable', 18, 70, 'brassica',
           companions=['onion', 'dill', 'celery', 'thyme', 'sage'],
           antagonists=['strawberry', 'tomato'],
           indoors=6),
    _plant('cauliflower', 'Cauliflower', '🥦', 'vegetable', 18, 75, 'brassica',
           companions=['beans', 'celery', 'dill', 'onion'],
           antagonists=['strawberry', 'tomato'],
           indoors=6),
    _plant('radish', 'Radish', '🌶️', 'vegetable', 2, 25, 'brassica', sun='partial',
           companions=['carrot', 'cucumber', 'lettuce', 'peas', 'spinach'],
           antagonists=['kale']),
    _plant('carrot', 'Carrot', '🥕', 'vegetable', 3, 70, 'umbellifer',
           companions=['tomato', 'onion', 'lettuce', 'chives', 'rosemary', 'sage'],
           antagonists=['dill', 'parsnip']),
    _plant('beet', 'Beet', '🟣', 'vegetable', 4, 55, 'amaranth',
           companions=['onion', 'lettuce', 'cabbage', 'garlic'],
           antagonists=['beans']),
    _plant('onion', 'Onion', '🧅', 'vegetable', 4, 100, 'allium', water='low',
           companions=['carrot', 'beet', 'lettuce', 'chives'],
           antagonists=['beans', 'peas'],
           indoors=10),
    _plant('garlic', 'Garlic', '🧄', 'vegetable', 4, 240, 'allium', water='low',
           companions=['tomato', 'beet', 'cabbage', 'strawberry'],
           antagonists=['beans', 'peas']),
    _plant('leek', 'Leek', '🧅', 'vegetable', 6, 120, 'allium',
           companions=['carrot', 'celery', 'onion'],
           antagonists=['beans', 'peas'],
           indoors=10, transplant=2),
    _plant('scallion', 'Scallion', '🧅', 'vegetable', 2, 60, 'allium',
           companions=['carrot', 'lettuce', 'tomato'],
           antagonists=['beans', 'peas']),
    _plant('beans', 'Green Beans', '🫘', 'vegetable', 6, 55, 'legume',
           companions=['corn', 'cucumber', 'potato', 'carrot', 'squash'],
           antagonists=['onion', 'garlic', 'leek', 'pepper']),
    _plant('peas', 'Peas', '🫛', 'vegetable', 3, 60, 'legume', sun='partial',
           companions=['carrot', 'radish', 'corn', 'cucumber', 'beans'],
           antagonists=['onion', 'garlic', 'chives']),
    _plant('corn', 'Sweet Corn', '🌽', 'vegetable', 12, 80, 'grass', water='high',
           companions=['beans', 'squash', 'pumpkin', 'cucumber', 'peas'],
           antagonists=['tomato']),
    _plant('celery', 'Celery', '🥬', 'vegetable', 8, 100, 'umbellifer', water='high',
           companions=['leek', 'tomato', 'cabbage', 'beans'],
           antagonists=['corn', 'potato'],
           indoors=10, transplant=2),
    _plant('parsnip', 'Parsnip', '🥕', 'vegetable', 4, 120, 'umbellifer',
           companions=['onion', 'radish', 'peas'],
           antagonists=['carrot', 'celery']),
    # Herbs
    _plant('basil', 'Basil', '🌿', 'herb', 6, 60, 'mint',
           companions=['tomato', 'pepper', 'oregano'],
           antagonists=['rosemary', 'sage'],
           indoors=6, transplant=1),
    _plant('mint', 'Mint', '🌱', 'herb', 12, 90, 'mint', sun='partial',
           companions=['cabbage', 'tomato', 'peas'],
           antagonists=['parsley']),
    _plant('parsley', 'Parsley', '🌿', 'herb', 6, 75, 'umbellifer', sun='partial',
           companions=['tomato', 'asparagus', 'corn'],
           antagonists=['lettuce', 'mint'],
           indoors=8),
    _plant('cilantro', 'Cilantro', '🌿', 'herb', 6, 45, 'umbellifer', sun='partial',
           companions=['spinach', 'beans', 'peas'],
           antagonists=['fennel']),
    _plant('dill', 'Dill', '🌿', 'herb', 12, 40, 'umbellifer', water='low',
           companions=['cabbage', 'cucumber', 'lettuce', 'onion'],
           antagonists=['carrot', 'tomato']),
    _plant('rosemary', 'Rosemary', '🌿', 'herb', 24, 90, 'mint', water='low',
           companions=['beans', 'cabbage', 'carrot', 'sage'],
           antagonists=['basil'],
           indoors=10, transplant=2),
    _plant('thyme', 'Thyme', '🌿', 'herb', 12, 85, 'mint', water='low',
           companions=['cabbage', 'eggplant', 'strawberry', 'tomato'],
           indoors=8, transplant=1),
    _plant('oregano', 'Oregano', '🌿', 'herb', 12, 80, 'mint', water='low',
           companions=['pepper', 'basil', 'squash'],
           indoors=8, transplant=1),
    _plant('sage', 'Sage', '🌿', 'herb', 18, 75, 'mint', water='low',
           companions=['cabbage', 'carrot', 'rosemary', 'strawberry'],
           antagonists=['cucumber', 'basil'],
           indoors=8, transplant=1),
    _plant('chives', 'Chives', '🌱', 'herb', 6, 60, 'allium',
           companions=['carrot', 'tomato', 'strawberry'],
           antagonists=['beans', 'peas']),
    # Fruits
    _plant('strawberry', 'Strawberry', '🍓', 'fruit', 12, 90, 'fruit',
           companions=['lettuce', 'spinach', 'beans', 'thyme', 'chives'],
           antagonists=['cabbage', 'broccoli', 'cauliflower', 'kale']),
    _plant('watermelon', 'Watermelon', '🍉', 'fruit', 36, 85, 'cucurbit', water='high',
           companions=['corn', 'radish', 'marigold', 'nasturtium'],
           antagonists=['potato'],
           indoors=4, transplant=2),
    _plant('cantaloupe', 'Cantaloupe', '🍈', 'fruit', 24, 80, 'cucurbit',
           companions=['corn', 'radish', 'marigold', 'nasturtium'],
           antagonists=['potato'],
           indoors=4, transplant=2),
    _plant('blueberry', 'Blueberry', '🫐', 'fruit', 48, 365, 'fruit', water='high',
           companions=['thyme', 'strawberry']),
    _plant('raspberry', 'Raspberry', '🍇', 'fruit', 24, 365, 'fruit',
           companions=['garlic', 'marigold'],
           antagonists=['potato', 'tomato']),
    # Flowers
    _plant('sunflower', 'Sunflower', '🌻', 'flower', 18, 80, 'aster', water='low',
           companions=['cucumber', 'corn', 'squash'],
           antagonists=['potato', 'beans']),
    _plant('marigold', 'Marigold', '🌼', 'flower', 8, 50, 'aster', water='low',
           companions=['tomato', 'pepper', 'potato', 'squash', 'cucumber'],
           indoors=6, transplant=1),
    _plant('zinnia', 'Zinnia', '🌸', 'flower', 9, 60, 'aster', water='low',
           companions=['tomato', 'cucumber', 'squash']),
    # No rotation family: nasturtiums self-seed anywhere
    _plant('nasturtium', 'Nasturtium', '🏵️', 'flower', 10, 50, None, water='low',
           companions=['tomato', 'cucumber', 'squash', 'radish', 'cabbage']),
]

PLANTS = OrderedDict((p.id, p) for p in _PLANT_LIST)


def get_plant(plant_id: str, catalog: Optional[Mapping[str, Plant]] = None) -> Optional[Plant]:
    """Look up a plant by id. Returns None for unknown ids."""
    catalog = PLANTS if catalog is None else catalog
    return catalog.get(plant_id)


def get_all_plants(catalog: Optional[Mapping[str, Plant]] = None) -> List[Plant]:
    """Return every plant in catalog order."""
    catalog = PLANTS if catalog is None else catalog
    return list(catalog.values())


def get_plants_by_category(category: str) -> List[Plant]:
    """Return plants of one category (vegetable, herb, fruit, flower)."""
    return [p for p in PLANTS.values() if p.category == category]


def get_plants_by_family(family: str) -> List[Plant]:
    """Return plants sharing a rotation family tag."""
    return [p for p in PLANTS.values() if p.family == family]


def get_family_name(family: str) -> str:
    info = PLANT_FAMILIES.get(family)
    return info['name'] if info else family


# ========================================
# USDA Zones
# ========================================

# (month, day) of the average last spring frost and first fall frost
ZONES = OrderedDict([
    (3, {'last_frost': (5, 15), 'first_frost': (9, 15), 'label': 'Zone 3 (-40 to -30 °F)'}),
    (4, {'last_frost': (5, 8), 'first_frost': (9, 25), 'label': 'Zone 4 (-30 to -20 °F)'}),
    (5, {'last_frost': (4, 15), 'first_frost': (10, 10), 'label': 'Zone 5 (-20 to -10 °F)'}),
    (6, {'last_frost': (4, 1), 'first_frost': (10, 20), 'label': 'Zone 6 (-10 to 0 °F)'}),
    (7, {'last_frost': (3, 22), 'first_frost': (10, 30), 'label': 'Zone 7 (0 to 10 °F)'}),
    (8, {'last_frost': (3, 8), 'first_frost': (11, 10), 'label': 'Zone 8 (10 to 20 °F)'}),
    (9, {'last_frost': (2, 15), 'first_frost': (12, 1), 'label': 'Zone 9 (20 to 30 °F)'}),
    (10, {'last_frost': (1, 30), 'first_frost': (12, 15), 'label': 'Zone 10 (30 to 40 °F)'}),
    (11, {'last_frost': (1, 15), 'first_frost': (12, 31), 'label': 'Zone 11 (above 40 °F)'}),
])

DEFAULT_ZONE = 6


def get_zone_data(zone: int) -> Optional[Dict[str, Any]]:
    """Frost data for a USDA zone, or None outside 3-11."""
    return ZONES.get(zone)
