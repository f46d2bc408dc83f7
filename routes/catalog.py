"""
routes/catalog.py - Read-only plant catalog and care reference API.

Provides:
- GET /api/plants                 - All plants (?category=, ?family=, ?q=)
- GET /api/plants/<plant_id>      - One plant with watering needs and pests
- GET /api/plants/families        - Rotation families and their followers
- GET /api/plants/pests           - Common pests and organic remedies
- GET /api/plants/soil-types      - Soil types and planting tips
"""

from flask import Blueprint, request, jsonify

from care_guide import COMMON_PESTS, SOIL_TYPES, get_watering_needs, get_pests_for_plants
from models import CATEGORIES
from plant_catalog import PLANT_FAMILIES, FAMILY_FOLLOWERS, get_all_plants, get_plant

catalog_bp = Blueprint('catalog', __name__, url_prefix='/api/plants')


@catalog_bp.route('')
def list_plants():
    """Get all plants, optionally filtered (JSON API)."""
    category = request.args.get('category')
    family = request.args.get('family')
    query = request.args.get('q', '').strip().lower()

    if category and category not in CATEGORIES:
        return jsonify({'success': False, 'error': f"Unknown category '{category}'."}), 400

    plants = get_all_plants()
    if category:
        plants = [p for p in plants if p.category == category]
    if family:
        plants = [p for p in plants if p.family == family]
    if query:
        plants = [p for p in plants if query in p.name.lower() or query in p.id]

    return jsonify({'success': True, 'plants': [p.to_dict() for p in plants]})


@catalog_bp.route('/families')
def families():
    return jsonify({
        'success': True,
        'families': [
            {
                'id': family_id,
                'name': info['name'],
                'emoji': info['emoji'],
                'goodFollowers': FAMILY_FOLLOWERS.get(family_id, []),
            }
            for family_id, info in PLANT_FAMILIES.items()
        ],
    })


@catalog_bp.route('/pests')
def pests():
    return jsonify({'success': True, 'pests': COMMON_PESTS})


@catalog_bp.route('/soil-types')
def soil_types():
    return jsonify({
        'success': True,
        'soilTypes': [{'id': soil_id, **info} for soil_id, info in SOIL_TYPES.items()],
    })


@catalog_bp.route('/<plant_id>')
def plant_detail(plant_id):
    """Get a single plant with its care details (JSON API)."""
    plant = get_plant(plant_id)
    if not plant:
        return jsonify({'success': False, 'error': f"Plant '{plant_id}' not found."}), 404
    return jsonify({
        'success': True,
        'plant': plant.to_dict(),
        'watering': get_watering_needs(plant_id),
        'pests': get_pests_for_plants([plant_id]),
    })
