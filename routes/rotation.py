"""
routes/rotation.py - Crop rotation tracking API.

Provides:
- GET  /api/rotation/warnings      - Same-family warnings (?year=)
- GET  /api/rotation/suggestions   - Good follower families
- GET  /api/rotation/history       - Recorded years
- POST /api/rotation/save          - Record this year's layout
- POST /api/rotation/clear         - Forget every recorded year
"""

from flask import Blueprint, request, jsonify

from routes.common import get_store, get_json_body, error_response

rotation_bp = Blueprint('rotation', __name__, url_prefix='/api/rotation')


@rotation_bp.route('/warnings')
def warnings():
    year = request.args.get('year', type=int)
    try:
        return jsonify({'success': True, 'warnings': get_store().get_rotation_warnings(year)})
    except Exception as e:
        return error_response(e)


@rotation_bp.route('/suggestions')
def suggestions():
    try:
        return jsonify({'success': True, 'suggestions': get_store().get_rotation_suggestions()})
    except Exception as e:
        return error_response(e)


@rotation_bp.route('/history')
def history():
    garden = get_store().active_garden
    return jsonify({'success': True, 'rotationHistory': garden.rotation_history})


@rotation_bp.route('/save', methods=['POST'])
def save():
    """Record the current layout under a year (defaults to this year)."""
    year = get_json_body().get('year')
    if year is not None and (not isinstance(year, int) or isinstance(year, bool)):
        return jsonify({'success': False, 'error': "Field 'year' must be an integer."}), 400
    try:
        entries = get_store().save_to_rotation_history(year)
        return jsonify({'success': True, 'entries': entries})
    except Exception as e:
        return error_response(e)


@rotation_bp.route('/clear', methods=['POST'])
def clear():
    try:
        get_store().clear_rotation_history()
        return jsonify({'success': True})
    except Exception as e:
        return error_response(e)
