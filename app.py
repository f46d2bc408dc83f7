"""
app.py - Flask entry point for the garden grid planner.

Initializes the Flask app, creates the storage table, loads the garden store
from the persisted snapshot and registers all API blueprints.

Configuration:
- SECRET_KEY       (env SECRET_KEY)     - CSRF token signing
- DATABASE         (env GARDEN_DB_PATH) - SQLite file holding the snapshot
- WTF_CSRF_ENABLED                      - set False in tests

Run: python app.py -> localhost:5000
"""

import os
from flask import Flask, jsonify
from flask_wtf.csrf import CSRFProtect, generate_csrf

from database import init_db, get_db_path
from routes.common import load_store
from routes.main import main_bp
from routes.gardens import gardens_bp
from routes.rotation import rotation_bp
from routes.calendar import calendar_bp
from routes.catalog import catalog_bp
from routes.logs import logs_bp
from routes.export import export_bp
from routes.settings import settings_bp
from routes.yields import yields_bp


def create_app(test_config=None):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'garden-grid-local-app-secret-key')
    app.config['WTF_CSRF_CHECK_DEFAULT'] = True
    app.config['DATABASE'] = get_db_path()

    if test_config:
        app.config.update(test_config)

    CSRFProtect(app)

    # Initialize storage and load the persisted gardens
    init_db(app.config['DATABASE'])
    load_store(app)

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(gardens_bp)
    app.register_blueprint(rotation_bp)
    app.register_blueprint(calendar_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(logs_bp)
    app.register_blueprint(export_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(yields_bp)

    @app.route('/api/csrf-token')
    def csrf_token():
        """Token for the X-CSRFToken header of state-changing requests."""
        return jsonify({'success': True, 'csrfToken': generate_csrf()})

    return app


if __name__ == '__main__':
    app = create_app()
    # Debug mode: enabled by default for development (auto-reload on file changes)
    # Set FLASK_DEBUG=0 to disable for production
    debug = os.environ.get('FLASK_DEBUG', '1') != '0'
    app.run(host='localhost', port=5000, debug=debug)
