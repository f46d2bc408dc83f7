"""
routes/yields.py - Expected yields and harvest log API.

Provides:
- GET  /api/yields                          - Expected yields + expected vs actual summary
- GET  /api/yields/defaults/<plant_id>      - Default per-plant yield of a crop
- POST /api/yields/expectations             - Override a crop's per-plant yield
- GET  /api/yields/harvests                 - Harvest logs, newest first
- POST /api/yields/harvests                 - Log a harvest
- POST /api/yields/harvests/<id>/delete     - Remove a harvest log
"""

from flask import Blueprint, jsonify

from routes.common import get_store, get_json_body, error_response
from yield_tracker import get_default_yield

yields_bp = Blueprint('yields', __name__, url_prefix='/api/yields')


@yields_bp.route('')
def yield_summary():
    try:
        return jsonify({'success': True, **get_store().get_yield_summary()})
    except Exception as e:
        return error_response(e)


@yields_bp.route('/defaults/<plant_id>')
def default_yield(plant_id):
    if plant_id not in get_store().catalog:
        return jsonify({'success': False, 'error': f"Plant '{plant_id}' not found."}), 404
    return jsonify({'success': True, 'plantId': plant_id, **get_default_yield(plant_id)})


@yields_bp.route('/expectations', methods=['POST'])
def set_expectation():
    data = get_json_body()
    try:
        expectation = get_store().set_yield_expectation(data.get('plantId'), data.get('yield'), data.get('unit'))
        return jsonify({'success': True, 'plantId': data.get('plantId'), **expectation})
    except Exception as e:
        return error_response(e)


# ========================================
# Harvest Logs
# ========================================

@yields_bp.route('/harvests', methods=['GET'])
def list_harvests():
    logs = get_store().get_harvest_logs()
    return jsonify({'success': True, 'harvests': [h.to_dict() for h in logs]})


@yields_bp.route('/harvests', methods=['POST'])
def add_harvest():
    data = get_json_body()
    try:
        log = get_store().add_harvest(
            data.get('plantId'),
            data.get('quantity'),
            unit=data.get('unit'),
            harvest_date=data.get('date'),
            x=data.get('x'),
            y=data.get('y'),
            notes=data.get('notes', ''),
            rating=data.get('rating'),
        )
        return jsonify({'success': True, 'harvest': log.to_dict()}), 201
    except Exception as e:
        return error_response(e)


@yields_bp.route('/harvests/<log_id>/delete', methods=['POST'])
def remove_harvest(log_id):
    try:
        get_store().remove_harvest(log_id)
        return jsonify({'success': True})
    except Exception as e:
        return error_response(e)
