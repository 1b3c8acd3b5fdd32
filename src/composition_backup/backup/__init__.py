"""Backup declarations: value types, builders and manifest rendering.

Usage:
    from composition_backup.backup import new_backup, new_backup_schedule
    from composition_backup.backup import render_backup, render_schedule, wrap_manifest
"""

from composition_backup.backup.declarations import new_backup, new_backup_schedule
from composition_backup.backup.manifests import (
    backup_resource,
    render_backup,
    render_schedule,
    schedule_resource,
    wrap_manifest,
)
from composition_backup.backup.models import (
    BackupDeclaration,
    BackupScheduleDeclaration,
    SelectorLabel,
)

__all__ = [
    "BackupDeclaration",
    "BackupScheduleDeclaration",
    "SelectorLabel",
    "new_backup",
    "new_backup_schedule",
    "render_backup",
    "render_schedule",
    "wrap_manifest",
    "backup_resource",
    "schedule_resource",
]
