"""
routes/settings.py - Preferences and administration routes.

Provides:
- GET  /settings/preferences      - Zone, soil type, visited flag, last save time
- POST /settings/preferences      - Update any of zone, soilType, hasVisited
- GET  /settings/backups          - List database backups
- POST /settings/backup/create    - Create a manual backup
- POST /settings/backup/restore   - Restore from backup and reload the store
- POST /settings/reset            - Back up, then start over with a fresh store
"""

from flask import Blueprint, current_app, jsonify

from database import delete_snapshot, get_last_saved_at
from routes.common import get_store, get_json_body, error_response, load_store
from utils.backup import backup_db, list_backups, restore_db

settings_bp = Blueprint('settings', __name__, url_prefix='/settings')


@settings_bp.route('/preferences', methods=['GET'])
def get_preferences():
    store = get_store()
    return jsonify({
        'success': True,
        'zone': store.zone,
        'soilType': store.soil_type,
        'hasVisited': store.has_visited,
        'lastSavedAt': get_last_saved_at(current_app.config['DATABASE']),
    })


@settings_bp.route('/preferences', methods=['POST'])
def save_preferences():
    data = get_json_body()
    store = get_store()
    try:
        if 'zone' in data:
            store.set_zone(data['zone'])
        if 'soilType' in data:
            store.set_soil_type(data['soilType'])
        if 'hasVisited' in data:
            store.set_has_visited(data['hasVisited'])
        return jsonify({
            'success': True,
            'zone': store.zone,
            'soilType': store.soil_type,
            'hasVisited': store.has_visited,
        })
    except Exception as e:
        return error_response(e)


# ========================================
# Backups
# ========================================

@settings_bp.route('/backups')
def backups():
    return jsonify({'success': True, 'backups': list_backups(current_app.config['DATABASE'])})


@settings_bp.route('/backup/create', methods=['POST'])
def create_backup():
    filename = backup_db(current_app.config['DATABASE'], 'manual')
    if not filename:
        return jsonify({'success': False, 'error': 'No database to back up.'}), 404
    return jsonify({'success': True, 'filename': filename}), 201


@settings_bp.route('/backup/restore', methods=['POST'])
def restore_backup():
    """Restore the database from a backup file and reload the in-memory store."""
    filename = get_json_body().get('filename', '')
    app = current_app._get_current_object()
    if not isinstance(filename, str) or not restore_db(app.config['DATABASE'], filename):
        return jsonify({'success': False, 'error': 'Backup not found.'}), 404

    app.logger.warning("Database restored from %s", filename)
    store = load_store(app)
    return jsonify({'success': True, **store.state_dict()})


@settings_bp.route('/reset', methods=['POST'])
def reset():
    """Forget every garden, keeping a backup of the old database."""
    app = current_app._get_current_object()
    backup_db(app.config['DATABASE'], 'pre_reset')
    delete_snapshot(app.config['DATABASE'])
    store = load_store(app)
    return jsonify({'success': True, **store.state_dict()})
