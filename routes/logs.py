"""
routes/logs.py - Journal, pest log, reminder and notification API.

Provides:
- POST /api/logs/journal                         - Add a journal entry
- POST /api/logs/journal/<id>/delete             - Remove a journal entry
- POST /api/logs/pests                           - Report a pest on a cell
- POST /api/logs/pests/<id>/resolve              - Mark a pest issue resolved
- POST /api/logs/pests/<id>/delete               - Remove a pest issue
- GET  /api/logs/reminders                       - All, upcoming and overdue reminders
- POST /api/logs/reminders                       - Add a reminder
- POST /api/logs/reminders/<id>/complete         - Complete (recurring ones roll over)
- POST /api/logs/reminders/<id>/snooze           - Push the due date back
- POST /api/logs/reminders/<id>/delete           - Remove a reminder
- GET  /api/logs/notifications                   - Notifications (overdue check first)
- POST /api/logs/notifications/<id>/read         - Mark one read
- POST /api/logs/notifications/clear             - Remove all notifications
"""

from flask import Blueprint, request, jsonify

from routes.common import get_store, get_json_body, error_response

logs_bp = Blueprint('logs', __name__, url_prefix='/api/logs')


# ========================================
# Journal
# ========================================

@logs_bp.route('/journal', methods=['GET'])
def list_journal():
    entries = get_store().active_garden.journal_entries
    return jsonify({'success': True, 'entries': [e.to_dict() for e in entries]})


@logs_bp.route('/journal', methods=['POST'])
def add_journal_entry():
    data = get_json_body()
    try:
        entry = get_store().add_journal_entry(data.get('text', ''), data.get('plantId'), data.get('date'))
        return jsonify({'success': True, 'entry': entry.to_dict()}), 201
    except Exception as e:
        return error_response(e)


@logs_bp.route('/journal/<entry_id>/delete', methods=['POST'])
def remove_journal_entry(entry_id):
    try:
        get_store().remove_journal_entry(entry_id)
        return jsonify({'success': True})
    except Exception as e:
        return error_response(e)


# ========================================
# Pest Issues
# ========================================

@logs_bp.route('/pests', methods=['GET'])
def list_pest_issues():
    issues = get_store().active_garden.pest_issues
    return jsonify({'success': True, 'issues': [i.to_dict() for i in issues]})


@logs_bp.route('/pests', methods=['POST'])
def add_pest_issue():
    data = get_json_body()
    try:
        issue = get_store().add_pest_issue(data.get('pestId'), data.get('x'), data.get('y'), data.get('notes', ''))
        return jsonify({'success': True, 'issue': issue.to_dict()}), 201
    except Exception as e:
        return error_response(e)


@logs_bp.route('/pests/<issue_id>/resolve', methods=['POST'])
def resolve_pest_issue(issue_id):
    try:
        issue = get_store().resolve_pest_issue(issue_id)
        return jsonify({'success': True, 'issue': issue.to_dict()})
    except Exception as e:
        return error_response(e)


@logs_bp.route('/pests/<issue_id>/delete', methods=['POST'])
def remove_pest_issue(issue_id):
    try:
        get_store().remove_pest_issue(issue_id)
        return jsonify({'success': True})
    except Exception as e:
        return error_response(e)


# ========================================
# Reminders
# ========================================

@logs_bp.route('/reminders', methods=['GET'])
def list_reminders():
    store = get_store()
    days = request.args.get('days', 7, type=int)
    return jsonify({
        'success': True,
        'reminders': [r.to_dict() for r in store.reminders],
        'upcoming': [r.to_dict() for r in store.get_upcoming_reminders(days=days)],
        'overdue': [r.to_dict() for r in store.get_overdue_reminders()],
    })


@logs_bp.route('/reminders', methods=['POST'])
def add_reminder():
    data = get_json_body()
    try:
        reminder = get_store().add_reminder(
            title=data.get('title', ''),
            due_date=data.get('dueDate'),
            reminder_type=data.get('type', 'custom'),
            plant_id=data.get('plantId'),
            plant_x=data.get('plantX'),
            plant_y=data.get('plantY'),
            notes=data.get('notes'),
            recurring_days=data.get('recurringDays'),
        )
        return jsonify({'success': True, 'reminder': reminder.to_dict()}), 201
    except Exception as e:
        return error_response(e)


@logs_bp.route('/reminders/<reminder_id>/complete', methods=['POST'])
def complete_reminder(reminder_id):
    try:
        next_reminder = get_store().complete_reminder(reminder_id)
        return jsonify({
            'success': True,
            'next': next_reminder.to_dict() if next_reminder else None,
        })
    except Exception as e:
        return error_response(e)


@logs_bp.route('/reminders/<reminder_id>/snooze', methods=['POST'])
def snooze_reminder(reminder_id):
    days = get_json_body().get('days', 1)
    try:
        reminder = get_store().snooze_reminder(reminder_id, days)
        return jsonify({'success': True, 'reminder': reminder.to_dict()})
    except Exception as e:
        return error_response(e)


@logs_bp.route('/reminders/<reminder_id>/delete', methods=['POST'])
def delete_reminder(reminder_id):
    try:
        get_store().delete_reminder(reminder_id)
        return jsonify({'success': True})
    except Exception as e:
        return error_response(e)


# ========================================
# Notifications
# ========================================

@logs_bp.route('/notifications', methods=['GET'])
def list_notifications():
    store = get_store()
    try:
        store.notify_overdue_reminders()
        return jsonify({
            'success': True,
            'notifications': [n.to_dict() for n in store.notifications],
            'unread': store.unread_notification_count,
        })
    except Exception as e:
        return error_response(e)


@logs_bp.route('/notifications/<notification_id>/read', methods=['POST'])
def mark_notification_read(notification_id):
    try:
        get_store().mark_notification_read(notification_id)
        return jsonify({'success': True})
    except Exception as e:
        return error_response(e)


@logs_bp.route('/notifications/clear', methods=['POST'])
def clear_notifications():
    try:
        get_store().clear_notifications()
        return jsonify({'success': True})
    except Exception as e:
        return error_response(e)
