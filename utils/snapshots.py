"""
utils/snapshots.py - JSON serialization of gardens and of the persisted store.

Two shapes live here:
- Garden export payload: {name, size, plants, pestIssues, rotationHistory,
  exportedAt, version}. Used by file export/import and share links.
- Store snapshot: {gardens, activeGardenId, hasVisited, zone, soilType,
  notifications, reminders}. Undo history and derived data are never included.
"""

import json
from datetime import datetime
from typing import Optional, Dict, Any

from models import Garden, PlacedPlant, PestIssue, new_id
from utils.validators import validate_garden_payload, DEFAULT_GRID_SIZE

EXPORT_VERSION = '1.0'

SNAPSHOT_KEYS = (
    'gardens', 'activeGardenId', 'hasVisited', 'zone', 'soilType',
    'notifications', 'reminders',
)


# ========================================
# Garden Export Payload
# ========================================

def build_export_payload(garden: Garden) -> Dict[str, Any]:
    return {
        'name': garden.name,
        'size': garden.size,
        'plants': [p.to_dict() for p in garden.plants],
        'pestIssues': [i.to_dict() for i in garden.pest_issues],
        'rotationHistory': {year: list(entries) for year, entries in garden.rotation_history.items()},
        'exportedAt': datetime.now().isoformat(timespec='seconds'),
        'version': EXPORT_VERSION,
    }


def export_garden_json(garden: Garden) -> str:
    """Serialize a garden as the pretty-printed export document."""
    return json.dumps(build_export_payload(garden), ensure_ascii=False, indent=2)


def parse_garden_payload(data: Any) -> Optional[Dict[str, Any]]:
    """
    Turn an export payload into garden fields.

    Args:
        data: Decoded JSON value.

    Returns:
        dict with keys name, size, plants, pest_issues, rotation_history,
        or None if the payload is invalid. Missing optional collections
        default to empty.
    """
    if validate_garden_payload(data) is not None:
        return None

    pest_issues = []
    for issue in data.get('pestIssues') or []:
        if not isinstance(issue, dict) or 'pestId' not in issue:
            continue
        try:
            pest_issues.append(PestIssue.from_dict({**issue, 'id': issue.get('id') or new_id('pest')}))
        except (KeyError, TypeError, ValueError):
            continue

    return {
        'name': data.get('name') or 'Imported Garden',
        'size': data.get('size') or DEFAULT_GRID_SIZE,
        'plants': [PlacedPlant.from_dict(p) for p in data['plants']],
        'pest_issues': pest_issues,
        'rotation_history': {
            str(year): [str(e) for e in entries]
            for year, entries in (data.get('rotationHistory') or {}).items()
        },
    }


def parse_garden_json(text: str) -> Optional[Dict[str, Any]]:
    """parse_garden_payload for raw JSON text; None on invalid JSON."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        return None
    return parse_garden_payload(data)


# ========================================
# Store Snapshot
# ========================================

def serialize_snapshot(snapshot: Dict[str, Any]) -> str:
    return json.dumps({key: snapshot.get(key) for key in SNAPSHOT_KEYS}, ensure_ascii=False)


def deserialize_snapshot(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Decode a persisted snapshot. Returns None for missing or corrupt data."""
    if not text:
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return data
