"""
utils/backup.py - Database backup and restore operations.

Copies the .db file to a backups/ directory beside it with timestamped filenames.
Backup triggers: before a garden import, manual from the API.
Format: garden_grid_YYYYMMDD_HHMMSS_{reason}.db
"""

import os
import shutil
from datetime import datetime

from database import get_db

BACKUP_PREFIX = 'garden_grid_'


def get_backup_dir(db_path):
    return os.path.join(os.path.dirname(os.path.abspath(db_path)), 'backups')


def backup_db(db_path, reason='manual'):
    """
    Copy the current database to backups/ with a timestamped filename.

    Args:
        db_path: Path of the live database file.
        reason: Short tag for the backup trigger (e.g., 'manual', 'pre_import').

    Returns:
        The filename of the created backup, or None if there is no database yet.
    """
    if not os.path.exists(db_path):
        return None

    backup_dir = get_backup_dir(db_path)
    os.makedirs(backup_dir, exist_ok=True)

    # Fold WAL pages into the main file so the copy is complete
    conn = get_db(db_path)
    try:
        conn.execute("PRAGMA wal_checkpoint(TRUNCATE)")
    finally:
        conn.close()

    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
    safe_reason = reason.replace(' ', '_').replace('/', '_')[:30]
    filename = f'{BACKUP_PREFIX}{timestamp}_{safe_reason}.db'
    shutil.copy2(db_path, os.path.join(backup_dir, filename))
    return filename


def list_backups(db_path):
    """
    List all backup files for a database.

    Returns:
        List of dicts with keys: filename, timestamp, size_bytes, size_display, reason.
        Sorted newest first.
    """
    backup_dir = get_backup_dir(db_path)
    if not os.path.isdir(backup_dir):
        return []

    backups = []
    for f in os.listdir(backup_dir):
        if not (f.startswith(BACKUP_PREFIX) and f.endswith('.db')):
            continue
        size_bytes = os.stat(os.path.join(backup_dir, f)).st_size

        # parts: [YYYYMMDD, HHMMSS, micro, reason...]
        parts = f[len(BACKUP_PREFIX):-len('.db')].split('_')
        timestamp_str = ''
        reason = ''
        if len(parts) >= 3:
            date_part, time_part = parts[0], parts[1]
            timestamp_str = (f'{date_part[:4]}-{date_part[4:6]}-{date_part[6:8]} '
                             f'{time_part[:2]}:{time_part[2:4]}:{time_part[4:6]}')
            reason = '_'.join(parts[3:])

        if size_bytes < 1024:
            size_display = f'{size_bytes} B'
        elif size_bytes < 1024 * 1024:
            size_display = f'{size_bytes / 1024:.1f} KB'
        else:
            size_display = f'{size_bytes / (1024 * 1024):.1f} MB'

        backups.append({
            'filename': f,
            'timestamp': timestamp_str,
            'size_bytes': size_bytes,
            'size_display': size_display,
            'reason': reason,
        })

    backups.sort(key=lambda b: b['filename'], reverse=True)
    return backups


def restore_db(db_path, filename):
    """
    Replace the current database with a backup file.

    DANGEROUS: This overwrites the current database entirely.

    Returns:
        True on success, False if the backup does not exist or is not one of ours.
    """
    if os.path.basename(filename) != filename:
        return False
    if not filename.startswith(BACKUP_PREFIX) or not filename.endswith('.db'):
        return False

    backup_path = os.path.join(get_backup_dir(db_path), filename)
    if not os.path.exists(backup_path):
        return False

    # Stale WAL/SHM files would be replayed on top of the restored copy
    for suffix in ('-wal', '-shm'):
        if os.path.exists(db_path + suffix):
            os.remove(db_path + suffix)
    shutil.copy2(backup_path, db_path)
    return True
