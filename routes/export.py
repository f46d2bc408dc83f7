"""
routes/export.py - Garden export, import, share-link and Excel routes.

Provides:
- GET  /export/json          - Download the active garden as JSON
- POST /export/import        - Replace the active garden from a JSON export
- GET  /export/share         - Share URL for the active garden (?base=)
- POST /export/share/load    - Open a shared garden as a new garden
- GET  /export/excel         - Download plan + calendar as Excel

Auto-backup is triggered before every accepted import and every Excel export.
"""

from flask import Blueprint, Response, current_app, jsonify, request, send_file

from routes.common import get_store, get_json_body, error_response
from utils.backup import backup_db
from utils.export import generate_garden_excel
from utils.snapshots import parse_garden_json

export_bp = Blueprint('export', __name__, url_prefix='/export')


@export_bp.route('/json')
def export_json():
    store = get_store()
    garden = store.active_garden
    safe_name = ''.join(c if c.isalnum() else '-' for c in garden.name).strip('-').lower() or 'garden'
    return Response(
        store.export_garden(),
        mimetype='application/json',
        headers={'Content-Disposition': f'attachment; filename={safe_name}.json'},
    )


def _import_text():
    """Export document from an uploaded file, a {json: ...} body or a raw JSON body."""
    upload = request.files.get('file')
    if upload is not None:
        return upload.read().decode('utf-8', errors='replace')
    data = get_json_body()
    if isinstance(data.get('json'), str):
        return data['json']
    return request.get_data(as_text=True)


@export_bp.route('/import', methods=['POST'])
def import_json():
    """Import a JSON export into the active garden."""
    text = _import_text()
    try:
        if parse_garden_json(text) is None:
            current_app.logger.warning("Rejected garden import (%d bytes)", len(text or ''))
            return jsonify({'success': False, 'error': 'Invalid garden file.'}), 400
        backup_db(current_app.config['DATABASE'], 'pre_import')
        get_store().import_garden(text)
        return jsonify({'success': True, **get_store().state_dict()})
    except Exception as e:
        return error_response(e)


@export_bp.route('/share')
def share_url():
    base_url = request.args.get('base') or request.host_url
    try:
        return jsonify({'success': True, 'url': get_store().get_share_url(base_url)})
    except Exception as e:
        return error_response(e)


@export_bp.route('/share/load', methods=['POST'])
def load_share():
    """Open a shared garden (URL or bare token) as a new active garden."""
    data = get_json_body()
    link = data.get('url') or data.get('token') or ''
    try:
        if not get_store().load_shared_garden(link):
            return jsonify({'success': False, 'error': 'Invalid share link.'}), 400
        return jsonify({'success': True, **get_store().state_dict()})
    except Exception as e:
        return error_response(e)


@export_bp.route('/excel')
def export_excel():
    """Export the active garden as an Excel workbook."""
    backup_db(current_app.config['DATABASE'], 'export')

    store = get_store()
    year = request.args.get('year', type=int)
    buffer, filename = generate_garden_excel(store.active_garden, store.zone, year, store.catalog)
    if not buffer:
        return jsonify({'success': False, 'error': 'Nothing to export, the garden is empty.'}), 404

    return send_file(
        buffer,
        as_attachment=True,
        download_name=filename,
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
