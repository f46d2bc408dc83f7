"""
care_guide.py - Watering, pest and soil guidance for the planted crops.

All lookups are keyed by catalog plant id. Plant ids without an entry are
ignored, so guidance degrades to generic defaults instead of failing.
"""

from collections import Counter
from typing import Optional, List, Dict, Any, Iterable


# ========================================
# Watering
# ========================================

# Inches of water per week and how often to water
WATERING_NEEDS = {
    # Vegetables
    'tomato': {'min_inches': 1, 'max_inches': 2, 'frequency': 'daily', 'notes': 'Consistent moisture prevents blossom end rot'},
    'pepper': {'min_inches': 1, 'max_inches': 1.5, 'frequency': '2-3x/week', 'notes': 'Keep soil consistently moist'},
    'eggplant': {'min_inches': 1, 'max_inches': 1.5, 'frequency': '2-3x/week', 'notes': 'Deep watering preferred'},
    'potato': {'min_inches': 1, 'max_inches': 1.5, 'frequency': '2-3x/week', 'notes': 'Consistent water for good tuber development'},
    'cucumber': {'min_inches': 1, 'max_inches': 2, 'frequency': 'daily', 'notes': 'High water needs, especially when fruiting'},
    'zucchini': {'min_inches': 1, 'max_inches': 1.5, 'frequency': '2-3x/week', 'notes': 'Water at base to prevent powdery mildew'},
    'squash': {'min_inches': 1, 'max_inches': 2, 'frequency': '2-3x/week', 'notes': 'Large leaves transpire quickly'},
    'pumpkin': {'min_inches': 1, 'max_inches': 2, 'frequency': '2-3x/week', 'notes': 'Deep weekly watering preferred'},
    'lettuce': {'min_inches': 1, 'max_inches': 1.5, 'frequency': '2-3x/week', 'notes': 'Keep consistently moist for tender leaves'},
    'spinach': {'min_inches': 1, 'max_inches': 1.5, 'frequency': '2-3x/week', 'notes': 'Bolts in heat, keep shaded in summer'},
    'kale': {'min_inches': 1, 'max_inches': 1.5, 'frequency': '2-3x/week', 'notes': 'Drought tolerant once established'},
    'broccoli': {'min_inches': 1, 'max_inches': 1.5, 'frequency': '2-3x/week', 'notes': 'Consistent moisture for head development'},
    'cabbage': {'min_inches': 1, 'max_inches': 1.5, 'frequency': '2-3x/week', 'notes': 'Water regularly for tight heads'},
    'carrot': {'min_inches': 1, 'max_inches': 1, 'frequency': '2-3x/week', 'notes': 'Shallow, frequent watering for roots'},
    'beet': {'min_inches': 1, 'max_inches': 1, 'frequency': '2-3x/week', 'notes': 'Even moisture for tender roots'},
    'onion': {'min_inches': 0.5, 'max_inches': 1, 'frequency': '1-2x/week', 'notes': 'Reduce watering as bulbs mature'},
    'garlic': {'min_inches': 0.5, 'max_inches': 1, 'frequency': '1-2x/week', 'notes': 'Stop watering a month before harvest'},
    'corn': {'min_inches': 1, 'max_inches': 2, 'frequency': '2-3x/week', 'notes': 'Water deeply during tasseling'},
    'beans': {'min_inches': 1, 'max_inches': 1, 'frequency': '2-3x/week', 'notes': 'Avoid overhead watering'},
    'peas': {'min_inches': 1, 'max_inches': 1, 'frequency': '2-3x/week', 'notes': 'Keep moist, not waterlogged'},
    # Herbs
    'basil': {'min_inches': 1, 'max_inches': 1.5, 'frequency': 'daily', 'notes': 'Loves water, keep soil moist'},
    'mint': {'min_inches': 1, 'max_inches': 1.5, 'frequency': '2-3x/week', 'notes': 'Can handle some neglect'},
    'parsley': {'min_inches': 1, 'max_inches': 1, 'frequency': '2-3x/week', 'notes': 'Keep consistently moist'},
    'cilantro': {'min_inches': 1, 'max_inches': 1, 'frequency': '2-3x/week', 'notes': 'Bolts quickly, provide shade'},
    'dill': {'min_inches': 0.5, 'max_inches': 1, 'frequency': '1-2x/week', 'notes': 'Drought tolerant herb'},
    'rosemary': {'min_inches': 0.5, 'max_inches': 1, 'frequency': 'weekly', 'notes': 'Prefers dry conditions'},
    'thyme': {'min_inches': 0.5, 'max_inches': 1, 'frequency': 'weekly', 'notes': 'Very drought tolerant'},
    'oregano': {'min_inches': 0.5, 'max_inches': 1, 'frequency': 'weekly', 'notes': 'Prefers dry conditions'},
    'sage': {'min_inches': 0.5, 'max_inches': 1, 'frequency': 'weekly', 'notes': 'Drought tolerant once established'},
    'chives': {'min_inches': 1, 'max_inches': 1, 'frequency': '1-2x/week', 'notes': 'Moderate water needs'},
    # Fruits
    'strawberry': {'min_inches': 1, 'max_inches': 1.5, 'frequency': '2-3x/week', 'notes': 'Consistent moisture for berries'},
    'watermelon': {'min_inches': 1, 'max_inches': 2, 'frequency': '2-3x/week', 'notes': 'Deep watering for large fruits'},
    'cantaloupe': {'min_inches': 1, 'max_inches': 2, 'frequency': '2-3x/week', 'notes': 'Reduce water near harvest'},
    'blueberry': {'min_inches': 1, 'max_inches': 2, 'frequency': '2-3x/week', 'notes': 'Acid-loving, consistent moisture'},
    'raspberry': {'min_inches': 1, 'max_inches': 1.5, 'frequency': '2-3x/week', 'notes': 'Keep soil moist not soggy'},
    # Flowers
    'sunflower': {'min_inches': 1, 'max_inches': 1, 'frequency': '1-2x/week', 'notes': 'Drought tolerant once established'},
    'marigold': {'min_inches': 1, 'max_inches': 1, 'frequency': '1-2x/week', 'notes': 'Drought tolerant'},
    'zinnia': {'min_inches': 1, 'max_inches': 1, 'frequency': '1-2x/week', 'notes': 'Allow soil to dry between watering'},
}

DEFAULT_WATERING_TIPS = [
    'Check soil moisture before watering',
    'Water in the morning to reduce evaporation',
]


def get_watering_needs(plant_id: str) -> Optional[Dict[str, Any]]:
    return WATERING_NEEDS.get(plant_id)


def calculate_garden_watering(plant_ids: Iterable[str]) -> Dict[str, Any]:
    """
    Average weekly water and the most common schedule for a set of plants.

    Duplicates count once per placed plant, so a bed full of tomatoes weighs
    more than a single basil.

    Returns:
        dict with keys: avg_inches, frequency, tips.
    """
    needs = [WATERING_NEEDS[pid] for pid in plant_ids if pid in WATERING_NEEDS]

    if not needs:
        return {
            'avg_inches': 1,
            'frequency': '1-2x/week',
            'tips': list(DEFAULT_WATERING_TIPS),
        }

    avg_min = sum(n['min_inches'] for n in needs) / len(needs)
    avg_max = sum(n['max_inches'] for n in needs) / len(needs)

    # Ties go to the frequency seen first
    frequency = Counter(n['frequency'] for n in needs).most_common(1)[0][0]

    return {
        'avg_inches': (avg_min + avg_max) / 2,
        'frequency': frequency,
        'tips': [
            f"Water most plants {frequency}",
            'Check soil moisture 1-2 inches deep before watering',
            'Water at base of plants to prevent leaf diseases',
            'Morning watering is best, it reduces evaporation and fungal growth',
        ],
    }


# ========================================
# Pests
# ========================================

COMMON_PESTS = [
    {
        'id': 'aphids',
        'name': 'Aphids',
        'emoji': '🐛',
        'affected_plants': ['tomato', 'pepper', 'lettuce', 'kale', 'cucumber', 'beans', 'marigold'],
        'symptoms': ['Curled or distorted leaves', 'Sticky honeydew on leaves', 'Stunted growth'],
        'organic_remedies': ['Spray with strong water jet', 'Apply neem oil spray', 'Introduce ladybugs'],
        'prevention': ['Encourage beneficial insects', 'Avoid over-fertilizing with nitrogen'],
    },
    {
        'id': 'tomato-hornworm',
        'name': 'Tomato Hornworm',
        'emoji': '🟢',
        'affected_plants': ['tomato', 'pepper', 'eggplant', 'potato'],
        'symptoms': ['Large irregular holes in leaves', 'Dark green droppings on leaves'],
        'organic_remedies': ['Hand-pick and drop in soapy water', 'Apply Bacillus thuringiensis (Bt)'],
        'prevention': ['Rotate crops annually', 'Till soil in spring to expose pupae'],
    },
    {
        'id': 'slugs',
        'name': 'Slugs & Snails',
        'emoji': '🐌',
        'affected_plants': ['lettuce', 'spinach', 'kale', 'cabbage', 'strawberry', 'beans', 'cucumber'],
        'symptoms': ['Irregular holes in leaves', 'Silvery slime trails'],
        'organic_remedies': ['Hand-pick at night', 'Set beer traps', 'Use diatomaceous earth'],
        'prevention': ['Water in the morning', 'Remove hiding spots', 'Use copper barriers'],
    },
    {
        'id': 'whiteflies',
        'name': 'Whiteflies',
        'emoji': '🦟',
        'affected_plants': ['tomato', 'pepper', 'cucumber', 'eggplant', 'squash', 'beans'],
        'symptoms': ['Tiny white insects under leaves', 'Yellowing leaves'],
        'organic_remedies': ['Use yellow sticky traps', 'Spray with neem oil'],
        'prevention': ['Use reflective mulch', 'Inspect new plants before adding them'],
    },
    {
        'id': 'carrot-fly',
        'name': 'Carrot Fly',
        'emoji': '🪰',
        'affected_plants': ['carrot', 'parsley', 'celery', 'parsnip'],
        'symptoms': ['Reddish-brown tunnels in roots', 'Yellowing leaves'],
        'organic_remedies': ['Remove affected plants', 'Apply parasitic nematodes'],
        'prevention': ['Use fine mesh row covers', 'Companion plant with alliums'],
    },
    {
        'id': 'cabbage-worm',
        'name': 'Cabbage Worm',
        'emoji': '🦋',
        'affected_plants': ['cabbage', 'broccoli', 'cauliflower', 'kale'],
        'symptoms': ['Large holes in leaves', 'Green caterpillars on leaves'],
        'organic_remedies': ['Hand-pick caterpillars', 'Apply Bacillus thuringiensis (Bt)'],
        'prevention': ['Use row covers', 'Interplant with thyme or sage'],
    },
    {
        'id': 'spider-mites',
        'name': 'Spider Mites',
        'emoji': '🕷️',
        'affected_plants': ['tomato', 'pepper', 'eggplant', 'cucumber', 'beans', 'strawberry'],
        'symptoms': ['Fine webbing on leaves', 'Stippled yellow leaves'],
        'organic_remedies': ['Spray leaves with water', 'Apply insecticidal soap'],
        'prevention': ['Keep plants well watered', 'Avoid dusty conditions'],
    },
    {
        'id': 'squash-bug',
        'name': 'Squash Bug',
        'emoji': '🪲',
        'affected_plants': ['zucchini', 'squash', 'pumpkin', 'cucumber', 'cantaloupe', 'watermelon'],
        'symptoms': ['Wilting leaves', 'Yellow spots turning brown'],
        'organic_remedies': ['Hand-pick adults and eggs', 'Trap under boards overnight'],
        'prevention': ['Use row covers until flowering', 'Clean up debris in fall'],
    },
    {
        'id': 'cucumber-beetle',
        'name': 'Cucumber Beetle',
        'emoji': '🐞',
        'affected_plants': ['cucumber', 'zucchini', 'squash', 'pumpkin', 'cantaloupe', 'corn'],
        'symptoms': ['Holes in leaves and flowers', 'Bacterial wilt'],
        'organic_remedies': ['Hand-pick beetles in early morning', 'Apply neem oil'],
        'prevention': ['Use row covers until flowering', 'Companion plant with radishes'],
    },
    {
        'id': 'flea-beetle',
        'name': 'Flea Beetle',
        'emoji': '🔵',
        'affected_plants': ['tomato', 'pepper', 'eggplant', 'potato', 'beans', 'lettuce', 'kale'],
        'symptoms': ['Many tiny holes in leaves', 'Stunted seedlings'],
        'organic_remedies': ['Dust with diatomaceous earth', 'Use row covers'],
        'prevention': ['Delay transplanting until larger', 'Keep garden weed-free'],
    },
]

_PESTS_BY_ID = {pest['id']: pest for pest in COMMON_PESTS}


def get_pests_for_plants(plant_ids: Iterable[str]) -> List[Dict[str, Any]]:
    """Pests that attack at least one of the given plants, in table order."""
    present = set(plant_ids)
    return [pest for pest in COMMON_PESTS if present.intersection(pest['affected_plants'])]


def get_pest_by_id(pest_id: str) -> Optional[Dict[str, Any]]:
    return _PESTS_BY_ID.get(pest_id)


# ========================================
# Soil
# ========================================

SOIL_TYPES = {
    'clay': {
        'name': 'Clay Soil',
        'description': 'Heavy, nutrient-rich soil that holds water well but drains slowly',
        'tips': [
            'Great for broccoli, Brussels sprouts, and cabbage',
            'Avoid root vegetables like carrots',
            'Work in organic matter to improve drainage',
        ],
        'improvements': ['Add compost or well-rotted manure', 'Use raised beds for better drainage'],
    },
    'sandy': {
        'name': 'Sandy Soil',
        'description': 'Light, free-draining soil that warms up quickly in spring',
        'tips': [
            'Perfect for carrots, potatoes, and lettuce',
            'Water more frequently, sandy soil dries fast',
            'Feed plants more often, nutrients wash away',
        ],
        'improvements': ['Add organic matter to retain water', 'Consider drip irrigation'],
    },
    'loamy': {
        'name': 'Loamy Soil',
        'description': 'Balanced texture with good drainage and nutrients',
        'tips': [
            'Perfect for almost all vegetables and fruits',
            'Maintain with compost',
            'Great for tomatoes, peppers, and beans',
        ],
        'improvements': ['Add compost annually', 'Rotate crops to maintain fertility'],
    },
    'silty': {
        'name': 'Silty Soil',
        'description': 'Smooth, slippery soil that holds moisture well',
        'tips': [
            'Great for moisture-loving plants like squash and cucumbers',
            'Can become compacted, avoid walking on it',
        ],
        'improvements': ['Add compost to improve structure', 'Use cover crops to prevent erosion'],
    },
    'peaty': {
        'name': 'Peaty Soil',
        'description': 'Dark, spongy soil that is naturally acidic',
        'tips': [
            'Great for acid-loving plants like blueberries',
            'Contains few nutrients, regular feeding needed',
        ],
        'improvements': ['Add lime to reduce acidity if needed', 'Improve drainage with raised beds'],
    },
    'chalky': {
        'name': 'Chalky Soil',
        'description': 'Alkaline, free-draining soil that can be shallow',
        'tips': [
            'Great for spinach, beets, and sweet corn',
            'Avoid acid-loving plants like blueberries',
        ],
        'improvements': ['Add organic matter to retain moisture', 'Use iron sulfate for chlorosis'],
    },
}

DEFAULT_SOIL_TYPE = 'loamy'


def get_soil_recommendations(soil_type: str) -> List[str]:
    """Planting tips for a soil type; empty for unknown types."""
    info = SOIL_TYPES.get(soil_type)
    return list(info['tips']) if info else []
