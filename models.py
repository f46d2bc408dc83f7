"""
models.py - Python dataclasses for the garden grid application.

Attribute names are snake_case; to_dict()/from_dict() map them to the
camelCase JSON shape used by exports, share links and the persisted store.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional, List, Dict, Any, FrozenSet


CATEGORIES = ('vegetable', 'herb', 'fruit', 'flower')
STAGES = ('seedling', 'growing', 'ready')
REMINDER_TYPES = ('water', 'fertilize', 'harvest', 'check', 'custom')
NOTIFICATION_TYPES = ('info', 'warning', 'success', 'harvest_ready')


def new_id(prefix: str) -> str:
    """Short random identifier such as "garden-1f3a9c0b2d4e"."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def now_iso() -> str:
    """Current local time as an ISO string (seconds precision)."""
    return datetime.now().isoformat(timespec='seconds')


def _parse_date(value) -> Optional[date]:
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Accept both "YYYY-MM-DD" and full ISO timestamps
    return date.fromisoformat(str(value)[:10])


@dataclass(frozen=True)
class Plant:
    """Static catalog entry."""
    id: str
    name: str
    emoji: str
    category: str
    spacing: float
    days_to_maturity: int
    sun_needs: str = 'full'
    water_needs: str = 'medium'
    companions: FrozenSet[str] = frozenset()
    antagonists: FrozenSet[str] = frozenset()
    start_indoors_weeks: int = 0
    transplant_weeks: int = 0
    family: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'emoji': self.emoji,
            'category': self.category,
            'spacing': self.spacing,
            'daysToMaturity': self.days_to_maturity,
            'sunNeeds': self.sun_needs,
            'waterNeeds': self.water_needs,
            'companions': sorted(self.companions),
            'antagonists': sorted(self.antagonists),
            'startIndoorsWeeks': self.start_indoors_weeks,
            'transplantWeeks': self.transplant_weeks,
            'family': self.family,
        }


@dataclass(frozen=True)
class PlacedPlant:
    """One plant occupying one grid cell.

    Frozen so that undo snapshots can share the same records.
    """
    id: str
    plant_id: str
    x: int
    y: int
    planted_at: Optional[str] = None
    stage: str = 'seedling'

    @property
    def cell_key(self) -> str:
        return f"{self.x}-{self.y}"

    def next_stage(self) -> 'PlacedPlant':
        """Return a copy advanced one stage (ready wraps back to seedling)."""
        idx = STAGES.index(self.stage) if self.stage in STAGES else -1
        return replace(self, stage=STAGES[(idx + 1) % len(STAGES)])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'plantId': self.plant_id,
            'x': self.x,
            'y': self.y,
            'plantedAt': self.planted_at,
            'stage': self.stage,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlacedPlant':
        plant_id = data['plantId']
        x, y = data['x'], data['y']
        return cls(
            id=data.get('id') or f"{plant_id}-{x}-{y}",
            plant_id=plant_id,
            x=x,
            y=y,
            planted_at=data.get('plantedAt'),
            stage=data.get('stage') or 'seedling',
        )


@dataclass
class JournalEntry:
    """Free-text garden journal entry."""
    id: str
    date: str
    text: str
    plant_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'date': self.date, 'text': self.text, 'plantId': self.plant_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JournalEntry':
        return cls(
            id=data['id'],
            date=data.get('date') or now_iso(),
            text=data.get('text', ''),
            plant_id=data.get('plantId'),
        )


@dataclass
class PestIssue:
    """A pest sighting logged against a grid cell."""
    id: str
    pest_id: str
    x: int
    y: int
    notes: str = ''
    reported_at: str = field(default_factory=now_iso)
    resolved: bool = False
    resolved_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'pestId': self.pest_id,
            'x': self.x,
            'y': self.y,
            'notes': self.notes,
            'reportedAt': self.reported_at,
            'resolved': self.resolved,
            'resolvedAt': self.resolved_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PestIssue':
        return cls(
            id=data['id'],
            pest_id=data['pestId'],
            x=data['x'],
            y=data['y'],
            notes=data.get('notes') or '',
            reported_at=data.get('reportedAt') or now_iso(),
            resolved=bool(data.get('resolved', False)),
            resolved_at=data.get('resolvedAt'),
        )


@dataclass
class HarvestLog:
    """One picked harvest, optionally tied to the cell it came from."""
    id: str
    plant_id: str
    quantity: float
    unit: str = 'lbs'
    date: str = field(default_factory=now_iso)
    x: Optional[int] = None
    y: Optional[int] = None
    notes: str = ''
    rating: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'plantId': self.plant_id,
            'quantity': self.quantity,
            'unit': self.unit,
            'date': self.date,
            'x': self.x,
            'y': self.y,
            'notes': self.notes,
            'rating': self.rating,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HarvestLog':
        return cls(
            id=data['id'],
            plant_id=data['plantId'],
            quantity=float(data['quantity']),
            unit=data.get('unit') or 'lbs',
            date=data.get('date') or now_iso(),
            x=data.get('x'),
            y=data.get('y'),
            notes=data.get('notes') or '',
            rating=data.get('rating'),
        )


@dataclass
class Garden:
    """A named grid of placed plants with its auxiliary logs."""
    id: str
    name: str = 'My First Garden'
    size: int = 8
    plants: List[PlacedPlant] = field(default_factory=list)
    journal_entries: List[JournalEntry] = field(default_factory=list)
    pest_issues: List[PestIssue] = field(default_factory=list)
    rotation_history: Dict[str, List[str]] = field(default_factory=dict)
    harvest_logs: List[HarvestLog] = field(default_factory=list)
    # plant id -> {'yield': per-plant amount, 'unit': ...}
    yield_expectations: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)

    def plant_at(self, x: int, y: int) -> Optional[PlacedPlant]:
        for placed in self.plants:
            if placed.x == x and placed.y == y:
                return placed
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'size': self.size,
            'plants': [p.to_dict() for p in self.plants],
            'journalEntries': [j.to_dict() for j in self.journal_entries],
            'pestIssues': [i.to_dict() for i in self.pest_issues],
            'rotationHistory': {year: list(entries) for year, entries in self.rotation_history.items()},
            'harvestLogs': [h.to_dict() for h in self.harvest_logs],
            'yieldExpectations': {pid: dict(exp) for pid, exp in self.yield_expectations.items()},
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Garden':
        return cls(
            id=data['id'],
            name=data.get('name') or 'My First Garden',
            size=data.get('size') or 8,
            plants=[PlacedPlant.from_dict(p) for p in data.get('plants') or []],
            journal_entries=[JournalEntry.from_dict(j) for j in data.get('journalEntries') or []],
            pest_issues=[PestIssue.from_dict(i) for i in data.get('pestIssues') or []],
            rotation_history={
                str(year): list(entries)
                for year, entries in (data.get('rotationHistory') or {}).items()
            },
            harvest_logs=[HarvestLog.from_dict(h) for h in data.get('harvestLogs') or []],
            yield_expectations={
                pid: dict(exp) for pid, exp in (data.get('yieldExpectations') or {}).items()
            },
            created_at=data.get('createdAt') or now_iso(),
            updated_at=data.get('updatedAt') or now_iso(),
        )


@dataclass(frozen=True)
class Relationship:
    """Derived adjacency relationship between two placed plants (never stored)."""
    type: str
    from_x: int
    from_y: int
    to_x: int
    to_y: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'fromX': self.from_x,
            'fromY': self.from_y,
            'toX': self.to_x,
            'toY': self.to_y,
        }


@dataclass
class Reminder:
    """User-created scheduled task."""
    id: str
    type: str
    title: str
    due_date: date
    plant_id: Optional[str] = None
    plant_x: Optional[int] = None
    plant_y: Optional[int] = None
    notes: Optional[str] = None
    completed: bool = False
    recurring_days: Optional[int] = None
    notified: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type,
            'title': self.title,
            'dueDate': self.due_date.isoformat(),
            'plantId': self.plant_id,
            'plantX': self.plant_x,
            'plantY': self.plant_y,
            'notes': self.notes,
            'completed': self.completed,
            'recurringDays': self.recurring_days,
            'notified': self.notified,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Reminder':
        due_date = _parse_date(data['dueDate'])
        if due_date is None:
            raise ValueError("Reminder needs a due date.")
        return cls(
            id=data['id'],
            type=data.get('type') or 'custom',
            title=data.get('title', ''),
            due_date=due_date,
            plant_id=data.get('plantId'),
            plant_x=data.get('plantX'),
            plant_y=data.get('plantY'),
            notes=data.get('notes'),
            completed=bool(data.get('completed', False)),
            recurring_days=data.get('recurringDays'),
            notified=bool(data.get('notified', False)),
        )


@dataclass
class Notification:
    """System-generated alert."""
    id: str
    type: str
    title: str
    message: str
    created_at: str = field(default_factory=now_iso)
    read: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type,
            'title': self.title,
            'message': self.message,
            'createdAt': self.created_at,
            'read': self.read,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Notification':
        return cls(
            id=data['id'],
            type=data.get('type') or 'info',
            title=data.get('title', ''),
            message=data.get('message', ''),
            created_at=data.get('createdAt') or now_iso(),
            read=bool(data.get('read', False)),
        )
