"""Backup decision engine.

Decides, for one evaluation, whether backup declarations should be
(re)synthesized for a parent, and produces the updated parent annotations
and desired resources.

The rules, first match wins:

1. Parent annotated ``backup-disabled: true`` (any case) -> ``SKIPPED_DISABLED``.
2. Parent ready, or a ``composition-backup`` entry already exists -> ``TRIGGERED``.
3. Otherwise -> ``SKIPPED_NOT_READY``.

Only the first creation is gated on readiness: once a backup exists its
resource set is recomputed on every evaluation, so children added or
removed later are picked up even while the parent is transiently not ready.

``evaluate()`` is a pure function of its arguments.  It returns new
objects and never mutates the inputs, so a failure part-way through leaves
nothing half-updated.

Usage:
    from composition_backup.engine.decision import evaluate, BackupState

    result = evaluate(parent, children, EngineConfig(schedule_expression="0 * * * *"))
    if result.state is BackupState.TRIGGERED:
        host.set_updated_parent(result.parent)
        host.set_updated_children(result.children)
"""

import logging
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, Field

from composition_backup.backup.declarations import new_backup, new_backup_schedule
from composition_backup.backup.manifests import backup_resource, schedule_resource
from composition_backup.backup.models import BackupDeclaration, BackupScheduleDeclaration
from composition_backup.config.models import EngineConfig
from composition_backup.engine.classifier import classify, label_children
from composition_backup.resources.base import ObservedResource, Readiness
from composition_backup.resources.keys import (
    BACKUP_DISABLED,
    BACKUP_RESOURCE_NAME,
    INITIAL_BACKUP_CREATED,
    INITIAL_SCHEDULE_CREATED,
    SCHEDULE_RESOURCE_NAME,
)
from composition_backup.resources.models import ChildResourceDescriptor, ParentResource

logger = logging.getLogger(__name__)


class BackupState(str, Enum):
    """Outcome of the trigger decision for one evaluation."""

    SKIPPED_DISABLED = "SKIPPED_DISABLED"
    SKIPPED_NOT_READY = "SKIPPED_NOT_READY"
    TRIGGERED = "TRIGGERED"


class Evaluation(BaseModel):
    """Result of one evaluation.

    On a skip, ``parent`` and ``children`` equal the inputs and both
    declarations are None.

    Attributes:
        state: Which rule matched.
        parent: Parent with updated idempotency markers.
        children: Desired resources with labels merged and declarations
            replaced.
        backup: Backup declaration synthesized this cycle, if any.
        schedule: Schedule declaration synthesized this cycle, if any.
    """

    state: BackupState
    parent: ParentResource
    children: dict[str, ChildResourceDescriptor] = Field(default_factory=dict)
    backup: BackupDeclaration | None = None
    schedule: BackupScheduleDeclaration | None = None

    @property
    def triggered(self) -> bool:
        return self.state is BackupState.TRIGGERED

    @property
    def included_resource_kinds(self) -> list[str]:
        """Resource keys of this cycle's backup (empty on a skip)."""
        if self.backup is None:
            return []
        return list(self.backup.included_resource_kinds)


def is_backup_disabled(parent: ObservedResource) -> bool:
    """True if the parent opted out of backups (case-insensitive ``"true"``)."""
    value = parent.get_annotations().get(BACKUP_DISABLED)
    return value is not None and value.lower() == "true"


def decide(parent: ObservedResource, children: Mapping[str, object]) -> BackupState:
    """Apply the trigger rules to a parent and its desired resources.

    Examples:
        >>> from composition_backup.resources.models import ParentResource
        >>> decide(ParentResource(name="db-1", readiness="True"), {})
        <BackupState.TRIGGERED: 'TRIGGERED'>
        >>> decide(ParentResource(name="db-1", readiness="False"), {})
        <BackupState.SKIPPED_NOT_READY: 'SKIPPED_NOT_READY'>
        >>> decide(ParentResource(name="db-1", readiness="False"),
        ...        {"composition-backup": object()})
        <BackupState.TRIGGERED: 'TRIGGERED'>
    """
    if is_backup_disabled(parent):
        return BackupState.SKIPPED_DISABLED

    backup_exists = BACKUP_RESOURCE_NAME in children
    if parent.get_readiness() is Readiness.TRUE or backup_exists:
        return BackupState.TRIGGERED

    return BackupState.SKIPPED_NOT_READY


def evaluate(
    parent: ParentResource,
    children: Mapping[str, ChildResourceDescriptor],
    config: EngineConfig,
) -> Evaluation:
    """Run one evaluation.

    On ``TRIGGERED``:

    - every ordinary child gets the part-of label merged in
    - the backup declaration is synthesized and replaces any entry under
      ``composition-backup``
    - if a schedule expression is configured, the schedule declaration
      replaces any entry under ``composition-backup-schedule``; without
      one an existing schedule entry is left as it is
    - ``initial-backup-created`` is set, and
      ``initial-backup-schedule-created`` when a schedule was synthesized

    Args:
        parent: Observed parent resource.
        children: Desired composed resources keyed by logical name.
        config: Engine configuration for this evaluation.

    Returns:
        Evaluation with the decision and updated parent/children.

    Raises:
        ClassificationError: If a child cannot be classified.
        SynthesisError: If a declaration cannot be built (empty parent name).
        ManifestError: If a declaration cannot be rendered.
    """
    state = decide(parent, children)

    if state is BackupState.SKIPPED_DISABLED:
        logger.debug(f"{parent.name!r} opted out of backups, skipping")
        return Evaluation(state=state, parent=parent, children=dict(children))

    if state is BackupState.SKIPPED_NOT_READY:
        logger.debug(
            f"{parent.name!r} is not ready ({parent.readiness.value}) "
            f"and has no backup yet, skipping"
        )
        return Evaluation(state=state, parent=parent, children=dict(children))

    logger.debug(
        f"Backup triggered for {parent.name!r} "
        f"(readiness={parent.readiness.value}, claim namespace={parent.claim_namespace!r})"
    )

    updated = label_children(children, parent.name)
    kinds = classify(updated)

    backup = new_backup(parent.name, config.storage_location, kinds)
    updated[BACKUP_RESOURCE_NAME] = backup_resource(backup, config.namespace)
    markers = {INITIAL_BACKUP_CREATED: "true"}

    schedule: BackupScheduleDeclaration | None = None
    if config.schedule_expression is not None:
        schedule = new_backup_schedule(
            parent.name,
            config.storage_location,
            config.schedule_expression,
            kinds,
        )
        updated[SCHEDULE_RESOURCE_NAME] = schedule_resource(schedule, config.namespace)
        markers[INITIAL_SCHEDULE_CREATED] = "true"

    logger.info(
        f"Synthesized backup for {parent.name!r} with {len(kinds)} resource kinds"
        + (f" and schedule {schedule.schedule_expression!r}" if schedule else "")
    )

    return Evaluation(
        state=state,
        parent=parent.with_annotations(markers),
        children=updated,
        backup=backup,
        schedule=schedule,
    )
