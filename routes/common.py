"""
routes/common.py - Helpers shared by the API blueprints.

The GardenStore lives in app.extensions; every blueprint reaches it through
get_store(). load_store() builds it from the persisted snapshot and subscribes
the SQLite writer so each mutation is saved.
"""

from flask import current_app, jsonify, request

from database import get_last_saved_at, load_snapshot, save_snapshot
from garden_store import GardenStore

STORE_EXTENSION = 'garden_store'


def load_store(app) -> GardenStore:
    """(Re)load the store for *app* from its database."""
    db_path = app.config['DATABASE']
    snapshot = load_snapshot(db_path)
    if snapshot is None and get_last_saved_at(db_path) is not None:
        print(f"Warning: Stored garden data in {db_path} is unreadable, starting from defaults.")
    store = GardenStore.from_snapshot(snapshot)

    def persist(changed):
        save_snapshot(changed.to_snapshot(), db_path)

    store.subscribe(persist)
    app.extensions[STORE_EXTENSION] = store
    app.logger.info("Loaded %d garden(s) from %s", len(store.gardens), db_path)
    return store


def get_store() -> GardenStore:
    return current_app.extensions[STORE_EXTENSION]


def get_json_body() -> dict:
    """Request JSON as a dict; anything else counts as an empty body."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def error_response(e: Exception):
    """Map store exceptions to JSON errors: bad input 400, unknown id 404."""
    if isinstance(e, LookupError):
        status = 404
    elif isinstance(e, ValueError):
        status = 400
    else:
        current_app.logger.exception("Unexpected error on %s", request.path)
        status = 500
    return jsonify({'success': False, 'error': str(e)}), status
