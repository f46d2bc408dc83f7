"""
utils/validators.py - Input validation helpers.

Each validator returns None when the value is acceptable, or a
human-readable error message otherwise. Validates:
- Grid sizes (square grids of 4, 8 or 12 cells)
- Cell coordinates (integers inside the grid)
- USDA zones and soil types
- Serialized garden payloads (export files and share links)
"""

from typing import Optional, Any, Dict

from care_guide import SOIL_TYPES
from plant_catalog import ZONES

GRID_SIZES = (4, 8, 12)
DEFAULT_GRID_SIZE = 8


def _is_int(value) -> bool:
    # bool is an int subclass; True/False are not coordinates
    return isinstance(value, int) and not isinstance(value, bool)


def validate_grid_size(size) -> Optional[str]:
    if not _is_int(size) or size not in GRID_SIZES:
        return f"Grid size must be one of {', '.join(str(s) for s in GRID_SIZES)} (got {size!r})."
    return None


def validate_coordinates(x, y, size: int) -> Optional[str]:
    if not _is_int(x) or not _is_int(y):
        return f"Coordinates must be integers (got x={x!r}, y={y!r})."
    if not (0 <= x < size and 0 <= y < size):
        return f"Cell ({x}, {y}) out of bounds for {size}x{size} grid."
    return None


def validate_zone(zone) -> Optional[str]:
    if not _is_int(zone) or zone not in ZONES:
        return f"Unknown USDA zone {zone!r} (supported: {min(ZONES)}-{max(ZONES)})."
    return None


def validate_soil_type(soil_type) -> Optional[str]:
    if not isinstance(soil_type, str) or soil_type not in SOIL_TYPES:
        return f"Unknown soil type {soil_type!r}."
    return None


def validate_placed_plant(entry: Any, size: int) -> Optional[str]:
    """Validate one serialized placed plant ({plantId, x, y, ...})."""
    if not isinstance(entry, dict):
        return "Placed plant entries must be objects."
    plant_id = entry.get('plantId')
    if not isinstance(plant_id, str) or not plant_id:
        return "Placed plant is missing its plantId."
    return validate_coordinates(entry.get('x'), entry.get('y'), size)


def validate_garden_payload(data: Any) -> Optional[str]:
    """
    Validate an exported garden payload before it touches any state.

    Only 'plants' is required; optional collections may be absent but must
    have the right shape when present.
    """
    if not isinstance(data, dict):
        return "Garden data must be a JSON object."

    plants = data.get('plants')
    if not isinstance(plants, list):
        return "Garden data has no plants list."

    size = data.get('size') or DEFAULT_GRID_SIZE
    error = validate_grid_size(size)
    if error:
        return error

    seen_cells = set()
    for entry in plants:
        error = validate_placed_plant(entry, size)
        if error:
            return error
        cell = (entry['x'], entry['y'])
        if cell in seen_cells:
            return f"Cell ({cell[0]}, {cell[1]}) holds more than one plant."
        seen_cells.add(cell)

    if not isinstance(data.get('pestIssues') or [], list):
        return "pestIssues must be a list."
    history: Dict = data.get('rotationHistory') or {}
    if not isinstance(history, dict) or not all(isinstance(v, list) for v in history.values()):
        return "rotationHistory must map years to lists of entries."
    return None
