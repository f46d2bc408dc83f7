"""
routes/calendar.py - Planting calendar API.

Provides:
- GET /api/calendar              - Planting events for the active garden (?year=)
- GET /api/calendar/succession   - Succession sowing dates (?year=, ?season=, ?upcoming=1)
- GET /api/calendar/zones        - USDA zones with frost dates
"""

from datetime import date

from flask import Blueprint, request, jsonify

from plant_catalog import ZONES
from planting_calendar import SEASONS, get_last_frost, get_first_frost
from routes.common import get_store, error_response

calendar_bp = Blueprint('calendar', __name__, url_prefix='/api/calendar')


@calendar_bp.route('')
def events():
    store = get_store()
    year = request.args.get('year', type=int) or date.today().year
    try:
        calendar_events = store.get_calendar_events(year)
        last_frost = get_last_frost(store.zone, year)
        first_frost = get_first_frost(store.zone, year)
        return jsonify({
            'success': True,
            'zone': store.zone,
            'year': year,
            'lastFrost': last_frost.isoformat() if last_frost else None,
            'firstFrost': first_frost.isoformat() if first_frost else None,
            'events': [e.to_dict() for e in calendar_events],
        })
    except Exception as e:
        return error_response(e)


@calendar_bp.route('/succession')
def succession():
    season = request.args.get('season') or None
    if season is not None and season not in SEASONS:
        return jsonify({'success': False, 'error': f"Unknown season '{season}'."}), 400

    year = request.args.get('year', type=int)
    today = date.today() if request.args.get('upcoming') == '1' else None
    try:
        schedule = get_store().get_succession_schedule(year, today, season)
        return jsonify({'success': True, 'schedule': schedule})
    except Exception as e:
        return error_response(e)


@calendar_bp.route('/zones')
def zones():
    return jsonify({
        'success': True,
        'zones': [
            {
                'zone': zone,
                'label': info['label'],
                'lastFrost': '%02d-%02d' % info['last_frost'],
                'firstFrost': '%02d-%02d' % info['first_frost'],
            }
            for zone, info in ZONES.items()
        ],
    })
