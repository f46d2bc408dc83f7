"""
routes/gardens.py - Multiple garden management API.

Provides:
- GET  /api/gardens                   - List gardens and the active id
- POST /api/gardens                   - Create a garden (becomes active)
- POST /api/gardens/<id>/switch       - Activate a garden
- POST /api/gardens/<id>/duplicate    - Copy a garden
- POST /api/gardens/<id>/delete       - Delete a garden (never the last one)
"""

from flask import Blueprint, jsonify

from routes.common import get_store, get_json_body, error_response
from utils.validators import DEFAULT_GRID_SIZE

gardens_bp = Blueprint('gardens', __name__, url_prefix='/api/gardens')


def _summary(garden):
    return {
        'id': garden.id,
        'name': garden.name,
        'size': garden.size,
        'plantCount': len(garden.plants),
        'createdAt': garden.created_at,
        'updatedAt': garden.updated_at,
    }


@gardens_bp.route('', methods=['GET'])
def list_gardens():
    store = get_store()
    return jsonify({
        'success': True,
        'gardens': [_summary(g) for g in store.gardens],
        'activeGardenId': store.active_garden_id,
    })


@gardens_bp.route('', methods=['POST'])
def create_garden():
    data = get_json_body()
    try:
        garden = get_store().create_garden(data.get('name'), data.get('size', DEFAULT_GRID_SIZE))
        return jsonify({'success': True, 'garden': garden.to_dict()}), 201
    except Exception as e:
        return error_response(e)


@gardens_bp.route('/<garden_id>/switch', methods=['POST'])
def switch_garden(garden_id):
    store = get_store()
    try:
        store.switch_garden(garden_id)
        return jsonify({'success': True, **store.state_dict()})
    except Exception as e:
        return error_response(e)


@gardens_bp.route('/<garden_id>/duplicate', methods=['POST'])
def duplicate_garden(garden_id):
    try:
        copy = get_store().duplicate_garden(garden_id)
        return jsonify({'success': True, 'garden': copy.to_dict()}), 201
    except Exception as e:
        return error_response(e)


@gardens_bp.route('/<garden_id>/delete', methods=['POST'])
def delete_garden(garden_id):
    store = get_store()
    try:
        if not store.delete_garden(garden_id):
            return jsonify({'success': False, 'error': 'Cannot delete the last garden.'}), 400
        return jsonify({'success': True, 'activeGardenId': store.active_garden_id})
    except Exception as e:
        return error_response(e)
