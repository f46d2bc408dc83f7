"""
routes/main.py - Active garden grid API.

Provides:
- GET  /api/garden                 - Active garden, undo/redo flags, preferences
- POST /api/garden/plants          - Place a plant on a cell
- POST /api/garden/plants/set      - Replace the whole plant list
- POST /api/garden/plants/remove   - Remove the plant on a cell
- POST /api/garden/plants/stage    - Cycle a plant's growth stage
- POST /api/garden/clear           - Remove every plant
- POST /api/garden/undo            - Undo last grid change
- POST /api/garden/redo            - Redo
- POST /api/garden/select          - Select the plant used by placement
- POST /api/garden/size            - Resize the grid (clears it)
- POST /api/garden/name            - Rename the active garden
- GET  /api/garden/analysis        - Relationships and harmony score
- GET  /api/garden/care            - Watering, pest risks, soil tips
- GET  /api/garden/stats           - Plant counts, family diversity, density
- GET  /api/garden/templates       - Preset layouts
- POST /api/garden/templates/<id>/apply - Replace the grid with a preset
"""

from flask import Blueprint, jsonify

from garden_templates import get_all_templates
from models import PlacedPlant
from routes.common import get_store, get_json_body, error_response
from utils.validators import validate_placed_plant

main_bp = Blueprint('main', __name__, url_prefix='/api/garden')


def _state(**extra):
    payload = {'success': True}
    payload.update(get_store().state_dict())
    payload.update(extra)
    return jsonify(payload)


@main_bp.route('')
def garden_state():
    """Current garden state (JSON API)."""
    try:
        return _state()
    except Exception as e:
        return error_response(e)


# ========================================
# Grid Editing
# ========================================

@main_bp.route('/plants', methods=['POST'])
def place_plant():
    data = get_json_body()
    try:
        placed = get_store().place_plant(data.get('x'), data.get('y'), data.get('plantId'))
        return _state(placed=placed.to_dict())
    except Exception as e:
        return error_response(e)


@main_bp.route('/plants/set', methods=['POST'])
def set_plants():
    """Replace the plant list in one undoable step."""
    data = get_json_body()
    entries = data.get('plants')
    if not isinstance(entries, list):
        return jsonify({'success': False, 'error': "Field 'plants' must be a list."}), 400

    store = get_store()
    try:
        for entry in entries:
            error = validate_placed_plant(entry, store.active_garden.size)
            if error:
                raise ValueError(error)
        store.set_placed_plants([PlacedPlant.from_dict(entry) for entry in entries])
        return _state()
    except Exception as e:
        return error_response(e)


@main_bp.route('/plants/remove', methods=['POST'])
def remove_plant():
    data = get_json_body()
    try:
        get_store().remove_plant(data.get('x'), data.get('y'))
        return _state()
    except Exception as e:
        return error_response(e)


@main_bp.route('/plants/stage', methods=['POST'])
def cycle_stage():
    data = get_json_body()
    try:
        placed = get_store().cycle_stage(data.get('x'), data.get('y'))
        return _state(placed=placed.to_dict())
    except Exception as e:
        return error_response(e)


@main_bp.route('/clear', methods=['POST'])
def clear_garden():
    try:
        get_store().clear_garden()
        return _state()
    except Exception as e:
        return error_response(e)


@main_bp.route('/undo', methods=['POST'])
def undo():
    try:
        changed = get_store().undo()
        return _state(changed=changed)
    except Exception as e:
        return error_response(e)


@main_bp.route('/redo', methods=['POST'])
def redo():
    try:
        changed = get_store().redo()
        return _state(changed=changed)
    except Exception as e:
        return error_response(e)


@main_bp.route('/select', methods=['POST'])
def select_plant():
    data = get_json_body()
    try:
        get_store().set_selected_plant(data.get('plantId'))
        return _state()
    except Exception as e:
        return error_response(e)


# ========================================
# Garden Settings
# ========================================

@main_bp.route('/size', methods=['POST'])
def set_grid_size():
    data = get_json_body()
    try:
        get_store().set_grid_size(data.get('size'))
        return _state()
    except Exception as e:
        return error_response(e)


@main_bp.route('/name', methods=['POST'])
def set_garden_name():
    data = get_json_body()
    try:
        get_store().set_garden_name(data.get('name', ''))
        return _state()
    except Exception as e:
        return error_response(e)


# ========================================
# Derived Views
# ========================================

@main_bp.route('/analysis')
def analysis():
    """Adjacency relationships and harmony score (JSON API)."""
    try:
        result = get_store().analyze_layout()
        return jsonify({'success': True, **result.to_dict()})
    except Exception as e:
        return error_response(e)


@main_bp.route('/care')
def care():
    try:
        return jsonify({'success': True, **get_store().get_care_summary()})
    except Exception as e:
        return error_response(e)


@main_bp.route('/stats')
def stats():
    """Plant counts, family diversity and density."""
    try:
        return jsonify({'success': True, **get_store().get_stats()})
    except Exception as e:
        return error_response(e)


# ========================================
# Templates
# ========================================

@main_bp.route('/templates')
def list_templates():
    return jsonify({'success': True, 'templates': get_all_templates()})


@main_bp.route('/templates/<template_id>/apply', methods=['POST'])
def apply_template(template_id):
    """Replace the grid with a preset layout (one undo step)."""
    try:
        get_store().apply_template(template_id)
        return _state()
    except Exception as e:
        return error_response(e)
