"""
garden_store.py - Authoritative in-memory state of the garden grid.

GardenStore owns:
- Every garden, with exactly one active at a time
- The active garden's undo/redo history (whole-list snapshots, max 50)
- User preferences (zone, soil type, visited flag)
- Reminders and notifications

set_placed_plants() is the single mutation primitive for the grid; the
place/remove/clear/stage helpers compute a new list and go through it.
Derived views (relationships, calendar, rotation warnings) are computed on
demand from the current state and never cached.

Every state change calls the subscribed listeners with the store, which is
how the Flask app persists the snapshot after each mutation.

One store is shared by every request thread of the Flask app. Mutators and
the snapshot/state readers hold a reentrant lock, so listeners always see a
consistent state and concurrent edits cannot interleave.
"""

import threading
from dataclasses import replace
from datetime import date, timedelta
from functools import wraps
from typing import Optional, List, Dict, Any, Callable

from models import (
    Garden, PlacedPlant, JournalEntry, PestIssue, HarvestLog, Reminder, Notification,
    REMINDER_TYPES, NOTIFICATION_TYPES, new_id, now_iso, _parse_date,
)
from plant_catalog import PLANTS, DEFAULT_ZONE
from care_guide import (
    DEFAULT_SOIL_TYPE, calculate_garden_watering, get_pests_for_plants, get_pest_by_id,
    get_soil_recommendations,
)
from relationship_scorer import analyze_layout
from planting_calendar import compute_calendar_events, get_succession_schedule
from garden_stats import get_garden_stats, calculate_diversity, calculate_density
from garden_templates import get_template, build_template_plants
from yield_tracker import calculate_expected_yields, summarize_harvests, get_default_yield
import rotation_engine
from utils.share import build_share_url, decode_garden, extract_share_token
from utils.snapshots import export_garden_json, parse_garden_json
from utils.validators import (
    DEFAULT_GRID_SIZE, validate_coordinates, validate_grid_size, validate_placed_plant,
    validate_soil_type, validate_zone,
)

HISTORY_LIMIT = 50


def _synchronized(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class GardenStore:
    """Explicit, owned garden state with bounded undo/redo."""

    def __init__(self, gardens: Optional[List[Garden]] = None, active_garden_id: Optional[str] = None,
                 zone: int = DEFAULT_ZONE, soil_type: str = DEFAULT_SOIL_TYPE, has_visited: bool = False,
                 reminders: Optional[List[Reminder]] = None,
                 notifications: Optional[List[Notification]] = None,
                 catalog=None, history_limit: int = HISTORY_LIMIT):
        """
        Build a store around existing gardens (or one fresh garden).

        Undo history is never persisted: a newly built store, including one
        loaded through from_snapshot(), starts with a single history entry
        holding the active garden's current plants, so nothing can be undone
        until the next change.
        """
        self._lock = threading.RLock()
        self.catalog = PLANTS if catalog is None else catalog
        self.gardens: List[Garden] = list(gardens) if gardens else [Garden(id=new_id('garden'))]
        garden_ids = [g.id for g in self.gardens]
        self.active_garden_id = active_garden_id if active_garden_id in garden_ids else garden_ids[0]
        self.zone = zone
        self.soil_type = soil_type
        self.has_visited = has_visited
        self.reminders: List[Reminder] = list(reminders or [])
        self.notifications: List[Notification] = list(notifications or [])
        self.selected_plant_id: Optional[str] = None
        self.history_limit = history_limit
        self._listeners: List[Callable[['GardenStore'], None]] = []
        self._reset_history()

    # ========================================
    # Listeners
    # ========================================

    @_synchronized
    def subscribe(self, listener: Callable[['GardenStore'], None]):
        """Call *listener(store)* after every state change."""
        self._listeners.append(listener)
        return listener

    @_synchronized
    def unsubscribe(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)

    # ========================================
    # Active Garden
    # ========================================

    @property
    def active_garden(self) -> Garden:
        for garden in self.gardens:
            if garden.id == self.active_garden_id:
                return garden
        raise LookupError(f"Active garden {self.active_garden_id} not found.")

    @property
    def placed_plants(self) -> List[PlacedPlant]:
        return list(self.active_garden.plants)

    def get_garden(self, garden_id: str) -> Garden:
        for garden in self.gardens:
            if garden.id == garden_id:
                return garden
        raise LookupError(f"Garden {garden_id} not found.")

    def _touch(self, garden: Optional[Garden] = None):
        (garden or self.active_garden).updated_at = now_iso()

    @_synchronized
    def set_selected_plant(self, plant_id: Optional[str]):
        if plant_id is not None and plant_id not in self.catalog:
            raise ValueError(f"Unknown plant '{plant_id}'.")
        self.selected_plant_id = plant_id

    @_synchronized
    def set_garden_name(self, name: str):
        name = (name or '').strip()
        if not name:
            raise ValueError("Garden name cannot be empty.")
        garden = self.active_garden
        garden.name = name
        self._touch(garden)
        self._notify()

    @_synchronized
    def set_grid_size(self, size: int):
        """Resize the active garden. The grid is cleared and undo history reset."""
        error = validate_grid_size(size)
        if error:
            raise ValueError(error)
        garden = self.active_garden
        garden.size = size
        garden.plants = []
        self._touch(garden)
        self._reset_history()
        self._notify()

    # ========================================
    # Placed Plants + Undo/Redo
    # ========================================

    def _reset_history(self):
        self._history = [tuple(self.active_garden.plants)]
        self._history_index = 0

    @_synchronized
    def set_placed_plants(self, plants: List[PlacedPlant]):
        """
        Replace the active garden's plants and record the new list in history.

        Any redo states beyond the current position are discarded, and the
        oldest snapshot is dropped once the history exceeds its limit.

        Raises:
            ValueError: a plant lies outside the grid or two share a cell.
        """
        garden = self.active_garden
        snapshot = tuple(plants)

        cells = set()
        for placed in snapshot:
            error = validate_coordinates(placed.x, placed.y, garden.size)
            if error:
                raise ValueError(error)
            if (placed.x, placed.y) in cells:
                raise ValueError(f"Cell ({placed.x}, {placed.y}) already holds a plant.")
            cells.add((placed.x, placed.y))

        history = self._history[:self._history_index + 1]
        history.append(snapshot)
        if len(history) > self.history_limit:
            del history[0]
        self._history = history
        self._history_index = len(history) - 1

        garden.plants = list(snapshot)
        self._touch(garden)
        self._notify()

    @_synchronized
    def place_plant(self, x: int, y: int, plant_id: Optional[str] = None) -> PlacedPlant:
        """
        Put a plant on a cell, replacing whatever grew there.

        Args:
            x, y: Cell coordinates.
            plant_id: Catalog id; defaults to the selected plant.

        Returns:
            The new PlacedPlant (stage reset to seedling, planted now).
        """
        plant_id = plant_id or self.selected_plant_id
        if not plant_id:
            raise ValueError("No plant selected.")
        if plant_id not in self.catalog:
            raise ValueError(f"Unknown plant '{plant_id}'.")
        error = validate_coordinates(x, y, self.active_garden.size)
        if error:
            raise ValueError(error)

        placed = PlacedPlant(
            id=f"{plant_id}-{x}-{y}",
            plant_id=plant_id,
            x=x,
            y=y,
            planted_at=now_iso(),
            stage='seedling',
        )
        plants = self.placed_plants
        for idx, existing in enumerate(plants):
            if existing.x == x and existing.y == y:
                plants[idx] = placed
                break
        else:
            plants.append(placed)

        self.set_placed_plants(plants)
        return placed

    @_synchronized
    def remove_plant(self, x: int, y: int):
        error = validate_coordinates(x, y, self.active_garden.size)
        if error:
            raise ValueError(error)
        self.set_placed_plants([p for p in self.placed_plants if not (p.x == x and p.y == y)])

    @_synchronized
    def clear_garden(self):
        self.set_placed_plants([])

    @_synchronized
    def cycle_stage(self, x: int, y: int) -> PlacedPlant:
        """Advance the plant on a cell: seedling -> growing -> ready -> seedling."""
        plants = self.placed_plants
        for idx, existing in enumerate(plants):
            if existing.x == x and existing.y == y:
                plants[idx] = existing.next_stage()
                self.set_placed_plants(plants)
                return plants[idx]
        raise LookupError(f"No plant at ({x}, {y}).")

    def can_undo(self) -> bool:
        return self._history_index > 0

    def can_redo(self) -> bool:
        return self._history_index < len(self._history) - 1

    @_synchronized
    def undo(self) -> bool:
        """Step back one snapshot. Returns False when already at the oldest."""
        if not self.can_undo():
            return False
        self._history_index -= 1
        self._restore_history_entry()
        return True

    @_synchronized
    def redo(self) -> bool:
        if not self.can_redo():
            return False
        self._history_index += 1
        self._restore_history_entry()
        return True

    def _restore_history_entry(self):
        garden = self.active_garden
        garden.plants = list(self._history[self._history_index])
        self._touch(garden)
        self._notify()

    @_synchronized
    def apply_template(self, template_id: str) -> List[PlacedPlant]:
        """
        Replace the active garden's plants with a preset layout.

        Goes through set_placed_plants(), so a single undo brings the
        previous layout back. Grid size and garden name are kept.
        """
        template = get_template(template_id)
        if template is None:
            raise LookupError(f"Template {template_id} not found.")
        if template['grid_size'] > self.active_garden.size:
            raise ValueError(f"Template '{template_id}' needs a grid of at least {template['grid_size']}.")
        plants = build_template_plants(template, now_iso(), self.catalog)
        self.set_placed_plants(plants)
        return plants

    # ========================================
    # Multiple Gardens
    # ========================================

    @_synchronized
    def create_garden(self, name: Optional[str] = None, size: int = DEFAULT_GRID_SIZE) -> Garden:
        """Add an empty garden and make it active."""
        error = validate_grid_size(size)
        if error:
            raise ValueError(error)
        garden = Garden(
            id=new_id('garden'),
            name=(name or '').strip() or f"Garden {len(self.gardens) + 1}",
            size=size,
        )
        self.gardens.append(garden)
        self.active_garden_id = garden.id
        self._reset_history()
        self._notify()
        return garden

    @_synchronized
    def switch_garden(self, garden_id: str):
        """Activate another garden. Undo history restarts from its current plants."""
        self.get_garden(garden_id)
        self.active_garden_id = garden_id
        self._reset_history()
        self._notify()

    @_synchronized
    def delete_garden(self, garden_id: str) -> bool:
        """Delete a garden. The last remaining garden cannot be deleted."""
        garden = self.get_garden(garden_id)
        if len(self.gardens) == 1:
            return False
        self.gardens.remove(garden)
        if garden_id == self.active_garden_id:
            self.active_garden_id = self.gardens[0].id
            self._reset_history()
        self._notify()
        return True

    @_synchronized
    def duplicate_garden(self, garden_id: str) -> Garden:
        """Copy a garden (plants, logs, rotation history) under a new id."""
        source = self.get_garden(garden_id)
        data = source.to_dict()
        data.update({
            'id': new_id('garden'),
            'name': f"{source.name} (Copy)",
            'createdAt': None,
            'updatedAt': None,
        })
        copy = Garden.from_dict(data)
        self.gardens.append(copy)
        self._notify()
        return copy

    # ========================================
    # Preferences
    # ========================================

    @_synchronized
    def set_zone(self, zone: int):
        error = validate_zone(zone)
        if error:
            raise ValueError(error)
        self.zone = zone
        self._notify()

    @_synchronized
    def set_soil_type(self, soil_type: str):
        error = validate_soil_type(soil_type)
        if error:
            raise ValueError(error)
        self.soil_type = soil_type
        self._notify()

    @_synchronized
    def set_has_visited(self, visited: bool = True):
        self.has_visited = bool(visited)
        self._notify()

    # ========================================
    # Derived Views
    # ========================================

    def analyze_layout(self):
        return analyze_layout(self.active_garden.plants, self.catalog)

    def get_calendar_events(self, year: Optional[int] = None):
        plant_ids = [p.plant_id for p in self.active_garden.plants]
        return compute_calendar_events(plant_ids, self.zone, year, self.catalog)

    def get_succession_schedule(self, year: Optional[int] = None, today: Optional[date] = None,
                                season: Optional[str] = None):
        plant_ids = [p.plant_id for p in self.active_garden.plants]
        return get_succession_schedule(plant_ids, self.zone, year, today, season, self.catalog)

    def get_care_summary(self) -> Dict[str, Any]:
        """Watering, pest risks and soil tips for the active garden."""
        plant_ids = [p.plant_id for p in self.active_garden.plants]
        return {
            'watering': calculate_garden_watering(plant_ids),
            'pests': get_pests_for_plants(plant_ids),
            'soilType': self.soil_type,
            'soilTips': get_soil_recommendations(self.soil_type),
        }

    def get_stats(self) -> Dict[str, Any]:
        """Counts, family diversity and density of the active garden."""
        garden = self.active_garden
        return {
            **get_garden_stats(garden.plants, self.catalog),
            'diversity': calculate_diversity(garden.plants, self.catalog),
            'density': calculate_density(garden.plants, garden.size),
        }

    # ========================================
    # Crop Rotation
    # ========================================

    @_synchronized
    def save_to_rotation_history(self, year: Optional[int] = None) -> List[str]:
        if year is None:
            year = date.today().year
        entries = rotation_engine.save_to_rotation_history(self.active_garden, year, self.catalog)
        self._touch()
        self._notify()
        return entries

    def get_rotation_warnings(self, current_year: Optional[int] = None):
        return rotation_engine.get_rotation_warnings(self.active_garden, current_year, self.catalog)

    def get_rotation_suggestions(self):
        return rotation_engine.get_rotation_suggestions(self.active_garden, self.catalog)

    @_synchronized
    def clear_rotation_history(self):
        rotation_engine.clear_rotation_history(self.active_garden)
        self._touch()
        self._notify()

    # ========================================
    # Export / Import / Share
    # ========================================

    def export_garden(self) -> str:
        return export_garden_json(self.active_garden)

    @_synchronized
    def import_garden(self, text: str) -> bool:
        """
        Replace the active garden's contents with an exported document.

        Returns:
            False (and leaves every bit of state untouched) when the document
            is not valid JSON, has no plants list, or holds malformed plants.
        """
        parsed = parse_garden_json(text)
        if parsed is None:
            return False

        garden = self.active_garden
        garden.name = parsed['name']
        garden.size = parsed['size']
        garden.plants = parsed['plants']
        garden.pest_issues = parsed['pest_issues']
        garden.rotation_history = parsed['rotation_history']
        self._touch(garden)
        self._reset_history()
        self._notify()
        return True

    def get_share_url(self, base_url: str) -> str:
        return build_share_url(base_url, self.active_garden)

    @_synchronized
    def load_shared_garden(self, url_or_token: str) -> bool:
        """
        Create a new garden from a share link and make it active.

        The previously active garden is left as it was.
        """
        parsed = decode_garden(extract_share_token(url_or_token or ''))
        if parsed is None:
            return False

        garden = Garden(
            id=new_id('garden'),
            name=parsed['name'],
            size=parsed['size'],
            plants=parsed['plants'],
            pest_issues=parsed['pest_issues'],
            rotation_history=parsed['rotation_history'],
        )
        self.gardens.append(garden)
        self.active_garden_id = garden.id
        self._reset_history()
        self._notify()
        return True

    # ========================================
    # Journal + Pest Issues
    # ========================================

    @_synchronized
    def add_journal_entry(self, text: str, plant_id: Optional[str] = None,
                          entry_date: Optional[str] = None) -> JournalEntry:
        text = (text or '').strip()
        if not text:
            raise ValueError("Journal entry cannot be empty.")
        entry = JournalEntry(id=new_id('journal'), date=entry_date or now_iso(), text=text, plant_id=plant_id)
        garden = self.active_garden
        garden.journal_entries.insert(0, entry)
        self._touch(garden)
        self._notify()
        return entry

    @_synchronized
    def remove_journal_entry(self, entry_id: str):
        garden = self.active_garden
        entry = _find_by_id(garden.journal_entries, entry_id, 'Journal entry')
        garden.journal_entries.remove(entry)
        self._touch(garden)
        self._notify()

    @_synchronized
    def add_pest_issue(self, pest_id: str, x: int, y: int, notes: str = '') -> PestIssue:
        if get_pest_by_id(pest_id) is None:
            raise ValueError(f"Unknown pest '{pest_id}'.")
        garden = self.active_garden
        error = validate_coordinates(x, y, garden.size)
        if error:
            raise ValueError(error)
        issue = PestIssue(id=new_id('pest'), pest_id=pest_id, x=x, y=y, notes=notes or '')
        garden.pest_issues.append(issue)
        self._touch(garden)
        self._notify()
        return issue

    @_synchronized
    def resolve_pest_issue(self, issue_id: str) -> PestIssue:
        garden = self.active_garden
        issue = _find_by_id(garden.pest_issues, issue_id, 'Pest issue')
        issue.resolved = True
        issue.resolved_at = now_iso()
        self._touch(garden)
        self._notify()
        return issue

    @_synchronized
    def remove_pest_issue(self, issue_id: str):
        garden = self.active_garden
        issue = _find_by_id(garden.pest_issues, issue_id, 'Pest issue')
        garden.pest_issues.remove(issue)
        self._touch(garden)
        self._notify()

    # ========================================
    # Yields + Harvests
    # ========================================

    @_synchronized
    def set_yield_expectation(self, plant_id: str, per_plant: float, unit: Optional[str] = None) -> Dict[str, Any]:
        """Override the default per-plant yield of a crop in the active garden."""
        if plant_id not in self.catalog:
            raise ValueError(f"Unknown plant '{plant_id}'.")
        if isinstance(per_plant, bool) or not isinstance(per_plant, (int, float)) or per_plant < 0:
            raise ValueError("Expected yield must be a non-negative number.")
        expectation = {'yield': per_plant, 'unit': unit or get_default_yield(plant_id)['unit']}
        garden = self.active_garden
        garden.yield_expectations[plant_id] = expectation
        self._touch(garden)
        self._notify()
        return expectation

    @_synchronized
    def add_harvest(self, plant_id: str, quantity: float, unit: Optional[str] = None,
                    harvest_date: Optional[str] = None, x: Optional[int] = None, y: Optional[int] = None,
                    notes: str = '', rating: Optional[int] = None) -> HarvestLog:
        if plant_id not in self.catalog:
            raise ValueError(f"Unknown plant '{plant_id}'.")
        if isinstance(quantity, bool) or not isinstance(quantity, (int, float)) or quantity <= 0:
            raise ValueError("Harvest quantity must be a positive number.")
        if rating is not None and (not isinstance(rating, int) or not 1 <= rating <= 5):
            raise ValueError("Rating must be between 1 and 5.")
        garden = self.active_garden
        if x is not None or y is not None:
            error = validate_coordinates(x, y, garden.size)
            if error:
                raise ValueError(error)

        log = HarvestLog(
            id=new_id('harvest'),
            plant_id=plant_id,
            quantity=float(quantity),
            unit=unit or get_default_yield(plant_id)['unit'],
            date=harvest_date or now_iso(),
            x=x,
            y=y,
            notes=notes or '',
            rating=rating,
        )
        garden.harvest_logs.append(log)
        self._touch(garden)
        self._notify()
        return log

    @_synchronized
    def remove_harvest(self, log_id: str):
        garden = self.active_garden
        garden.harvest_logs.remove(_find_by_id(garden.harvest_logs, log_id, 'Harvest'))
        self._touch(garden)
        self._notify()

    def get_harvest_logs(self) -> List[HarvestLog]:
        """Harvests of the active garden, newest first."""
        return sorted(self.active_garden.harvest_logs, key=lambda h: h.date, reverse=True)

    def get_yield_summary(self) -> Dict[str, Any]:
        garden = self.active_garden
        return {
            'expected': calculate_expected_yields(garden.plants, garden.yield_expectations, self.catalog),
            'summary': summarize_harvests(garden.plants, garden.harvest_logs,
                                          garden.yield_expectations, self.catalog),
        }

    # ========================================
    # Reminders
    # ========================================

    @_synchronized
    def add_reminder(self, title: str, due_date, reminder_type: str = 'custom',
                     plant_id: Optional[str] = None, plant_x: Optional[int] = None,
                     plant_y: Optional[int] = None, notes: Optional[str] = None,
                     recurring_days: Optional[int] = None) -> Reminder:
        title = (title or '').strip()
        if not title:
            raise ValueError("Reminder title cannot be empty.")
        if reminder_type not in REMINDER_TYPES:
            raise ValueError(f"Unknown reminder type '{reminder_type}'.")
        try:
            due = _parse_date(due_date)
        except ValueError:
            raise ValueError(f"Invalid due date {due_date!r}.")
        if due is None:
            raise ValueError("Reminder needs a due date.")
        if recurring_days is not None and (not isinstance(recurring_days, int) or recurring_days < 0):
            raise ValueError("recurring_days must be a positive number of days.")

        reminder = Reminder(
            id=new_id('reminder'),
            type=reminder_type,
            title=title,
            due_date=due,
            plant_id=plant_id,
            plant_x=plant_x,
            plant_y=plant_y,
            notes=notes,
            recurring_days=recurring_days or None,
        )
        self.reminders.append(reminder)
        self._notify()
        return reminder

    def get_reminder(self, reminder_id: str) -> Reminder:
        return _find_by_id(self.reminders, reminder_id, 'Reminder')

    @_synchronized
    def complete_reminder(self, reminder_id: str) -> Optional[Reminder]:
        """
        Mark a reminder done.

        Returns:
            The next occurrence for recurring reminders, otherwise None.
        """
        reminder = self.get_reminder(reminder_id)
        reminder.completed = True

        next_reminder = None
        if reminder.recurring_days:
            next_reminder = replace(
                reminder,
                id=new_id('reminder'),
                due_date=reminder.due_date + timedelta(days=reminder.recurring_days),
                completed=False,
                notified=False,
            )
            self.reminders.append(next_reminder)
        self._notify()
        return next_reminder

    @_synchronized
    def snooze_reminder(self, reminder_id: str, days: int = 1) -> Reminder:
        if not isinstance(days, int) or days < 1:
            raise ValueError("Snooze needs at least one day.")
        reminder = self.get_reminder(reminder_id)
        reminder.due_date = reminder.due_date + timedelta(days=days)
        reminder.notified = False
        self._notify()
        return reminder

    @_synchronized
    def delete_reminder(self, reminder_id: str):
        self.reminders.remove(self.get_reminder(reminder_id))
        self._notify()

    def get_upcoming_reminders(self, today: Optional[date] = None, days: int = 7) -> List[Reminder]:
        today = today or date.today()
        horizon = today + timedelta(days=days)
        upcoming = [r for r in self.reminders if not r.completed and today <= r.due_date <= horizon]
        return sorted(upcoming, key=lambda r: r.due_date)

    def get_overdue_reminders(self, today: Optional[date] = None) -> List[Reminder]:
        today = today or date.today()
        overdue = [r for r in self.reminders if not r.completed and r.due_date < today]
        return sorted(overdue, key=lambda r: r.due_date)

    # ========================================
    # Notifications
    # ========================================

    @_synchronized
    def add_notification(self, notification_type: str, title: str, message: str) -> Notification:
        if notification_type not in NOTIFICATION_TYPES:
            raise ValueError(f"Unknown notification type '{notification_type}'.")
        notification = Notification(id=new_id('notification'), type=notification_type,
                                    title=title, message=message)
        # Newest first
        self.notifications.insert(0, notification)
        self._notify()
        return notification

    @_synchronized
    def mark_notification_read(self, notification_id: str):
        _find_by_id(self.notifications, notification_id, 'Notification').read = True
        self._notify()

    @_synchronized
    def clear_notifications(self):
        self.notifications = []
        self._notify()

    @property
    def unread_notification_count(self) -> int:
        return sum(1 for n in self.notifications if not n.read)

    @_synchronized
    def notify_overdue_reminders(self, today: Optional[date] = None) -> List[Notification]:
        """Raise one warning notification per overdue reminder not yet notified."""
        created = []
        for reminder in self.get_overdue_reminders(today):
            if reminder.notified:
                continue
            reminder.notified = True
            created.append(self.add_notification(
                'warning',
                f"Overdue: {reminder.title}",
                f"'{reminder.title}' was due on {reminder.due_date.isoformat()}.",
            ))
        return created

    # ========================================
    # Persistence
    # ========================================

    @_synchronized
    def to_snapshot(self) -> Dict[str, Any]:
        """Persistable state. Undo history and derived views are left out."""
        return {
            'gardens': [g.to_dict() for g in self.gardens],
            'activeGardenId': self.active_garden_id,
            'hasVisited': self.has_visited,
            'zone': self.zone,
            'soilType': self.soil_type,
            'notifications': [n.to_dict() for n in self.notifications],
            'reminders': [r.to_dict() for r in self.reminders],
        }

    @classmethod
    def from_snapshot(cls, snapshot: Optional[Dict[str, Any]], catalog=None) -> 'GardenStore':
        """
        Rebuild a store from a persisted snapshot.

        Corrupt gardens, off-grid plants and malformed records are dropped
        rather than loaded; a missing snapshot yields a fresh store.
        """
        if not snapshot:
            return cls(catalog=catalog)

        gardens = []
        for data in snapshot.get('gardens') or []:
            garden = _load_garden(data)
            if garden is not None:
                gardens.append(garden)

        zone = snapshot.get('zone', DEFAULT_ZONE)
        if validate_zone(zone):
            zone = DEFAULT_ZONE
        soil_type = snapshot.get('soilType', DEFAULT_SOIL_TYPE)
        if validate_soil_type(soil_type):
            soil_type = DEFAULT_SOIL_TYPE

        return cls(
            gardens=gardens,
            active_garden_id=snapshot.get('activeGardenId'),
            zone=zone,
            soil_type=soil_type,
            has_visited=bool(snapshot.get('hasVisited', False)),
            reminders=_load_records(Reminder, snapshot.get('reminders')),
            notifications=_load_records(Notification, snapshot.get('notifications')),
            catalog=catalog,
        )

    @_synchronized
    def state_dict(self) -> Dict[str, Any]:
        """Active garden plus undo flags, as served to clients."""
        return {
            'garden': self.active_garden.to_dict(),
            'activeGardenId': self.active_garden_id,
            'selectedPlantId': self.selected_plant_id,
            'canUndo': self.can_undo(),
            'canRedo': self.can_redo(),
            'zone': self.zone,
            'soilType': self.soil_type,
            'hasVisited': self.has_visited,
        }


def _find_by_id(items, item_id, label):
    for item in items:
        if item.id == item_id:
            return item
    raise LookupError(f"{label} {item_id} not found.")


def _load_garden(data) -> Optional[Garden]:
    if not isinstance(data, dict):
        return None
    try:
        size = data.get('size') or DEFAULT_GRID_SIZE
        if validate_grid_size(size):
            size = DEFAULT_GRID_SIZE
        plants, cells = [], set()
        for entry in data.get('plants') or []:
            if validate_placed_plant(entry, size):
                continue
            if (entry['x'], entry['y']) in cells:
                continue
            cells.add((entry['x'], entry['y']))
            plants.append(entry)
        garden = Garden.from_dict({
            **data,
            'size': size,
            'plants': plants,
            'journalEntries': [],
            'pestIssues': [],
            'harvestLogs': [],
            'rotationHistory': _load_rotation_history(data.get('rotationHistory')),
            'yieldExpectations': _load_yield_expectations(data.get('yieldExpectations')),
        })
    except (KeyError, TypeError, ValueError, AttributeError):
        return None

    # A bad log record costs only that record, never the garden
    garden.journal_entries = _load_records(JournalEntry, data.get('journalEntries'))
    garden.pest_issues = _load_records(PestIssue, data.get('pestIssues'))
    garden.harvest_logs = _load_records(HarvestLog, data.get('harvestLogs'))
    return garden


def _load_rotation_history(history) -> Dict[str, List[str]]:
    if not isinstance(history, dict):
        return {}
    return {
        str(year): [e for e in entries if isinstance(e, str)]
        for year, entries in history.items()
        if isinstance(entries, list)
    }


def _load_yield_expectations(expectations) -> Dict[str, Dict[str, Any]]:
    if not isinstance(expectations, dict):
        return {}
    loaded = {}
    for plant_id, expectation in expectations.items():
        if not isinstance(expectation, dict):
            continue
        amount = expectation.get('yield')
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            continue
        loaded[plant_id] = {'yield': amount, 'unit': expectation.get('unit') or 'lbs'}
    return loaded


def _load_records(record_cls, items) -> list:
    if not isinstance(items, list):
        return []
    records = []
    for data in items:
        try:
            records.append(record_cls.from_dict(data))
        except (KeyError, TypeError, ValueError, AttributeError):
            continue
    return records
