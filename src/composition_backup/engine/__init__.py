"""Backup decision engine and resource classifier.

Usage:
    from composition_backup.engine import evaluate, decide, classify, BackupState
"""

from composition_backup.engine.classifier import classify, label_children, resource_key
from composition_backup.engine.decision import (
    BackupState,
    Evaluation,
    decide,
    evaluate,
    is_backup_disabled,
)

__all__ = [
    "classify",
    "label_children",
    "resource_key",
    "BackupState",
    "Evaluation",
    "decide",
    "evaluate",
    "is_backup_disabled",
]
