"""Builder functions for backup declarations.

Builders only look at their arguments; they never read or modify any
other state.
"""

from collections.abc import Iterable

from pydantic import ValidationError

from composition_backup.backup.models import (
    BackupDeclaration,
    BackupScheduleDeclaration,
    SelectorLabel,
)
from composition_backup.errors import SynthesisError


def new_backup(
    name: str,
    storage_location: str,
    resources: Iterable[str],
) -> BackupDeclaration:
    """Build a one-shot backup declaration for the parent called *name*.

    Args:
        name: Parent resource name; names the declaration and is the
            selector label value.
        storage_location: Backup storage location identifier.
        resources: Resource keys (``"<Kind>.<group>"``) to include.

    Returns:
        BackupDeclaration with cluster-scoped resources included.

    Raises:
        SynthesisError: If *name* is empty or a field fails validation.

    Example:
        >>> new_backup("db-1", "default", ["Secret."]).selector_label.value
        'db-1'
    """
    if not name:
        raise SynthesisError("cannot synthesize backup declaration", "parent name is empty")
    try:
        return BackupDeclaration(
            name=name,
            storage_location=storage_location,
            included_resource_kinds=list(resources),
            include_cluster_scoped=True,
            selector_label=SelectorLabel(value=name),
        )
    except ValidationError as e:
        raise SynthesisError("cannot synthesize backup declaration", e) from e


def new_backup_schedule(
    name: str,
    storage_location: str,
    schedule_expression: str,
    resources: Iterable[str],
) -> BackupScheduleDeclaration:
    """Build a recurring backup declaration.

    Same as :func:`new_backup` plus the schedule expression, which is
    passed through unvalidated.  Owner references are always propagated.

    Raises:
        SynthesisError: If *name* is empty or a field fails validation.
    """
    if not name:
        raise SynthesisError(
            "cannot synthesize backup schedule declaration", "parent name is empty"
        )
    try:
        return BackupScheduleDeclaration(
            name=name,
            storage_location=storage_location,
            included_resource_kinds=list(resources),
            include_cluster_scoped=True,
            selector_label=SelectorLabel(value=name),
            schedule_expression=schedule_expression,
            use_owner_references=True,
        )
    except ValidationError as e:
        raise SynthesisError("cannot synthesize backup schedule declaration", e) from e
