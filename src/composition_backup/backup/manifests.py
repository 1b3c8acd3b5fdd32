"""Rendering of declarations into Velero manifests.

Declarations are rendered as Velero ``Backup``/``Schedule`` manifests and
then wrapped in a provider-kubernetes ``Object`` so they can be composed
like any other managed resource.  The wrapper carries the
exclude-from-backup annotation so it never backs itself up.

Usage:
    from composition_backup.backup.manifests import render_backup, wrap_manifest

    manifest = render_backup(decl, namespace="velero-system")
    obj = wrap_manifest(decl.name, manifest)
"""

import json
from typing import Any

from composition_backup.backup.models import BackupDeclaration, BackupScheduleDeclaration
from composition_backup.errors import ManifestError
from composition_backup.resources.keys import EXCLUDE_FROM_BACKUP
from composition_backup.resources.models import ChildResourceDescriptor

VELERO_API_VERSION = "velero.io/v1"
OBJECT_API_VERSION = "kubernetes.crossplane.io/v1alpha1"
OBJECT_KIND = "Object"


def _template(decl: BackupDeclaration) -> dict[str, Any]:
    """Velero backup template shared by Backup.spec and Schedule.spec.template."""
    return {
        "storageLocation": decl.storage_location,
        "includedResources": list(decl.included_resource_kinds),
        "includeClusterResources": decl.include_cluster_scoped,
        "labelSelector": {
            "matchLabels": {decl.selector_label.key: decl.selector_label.value},
        },
    }


def render_backup(decl: BackupDeclaration, namespace: str) -> dict[str, Any]:
    """Render a Velero ``Backup`` manifest."""
    return {
        "apiVersion": VELERO_API_VERSION,
        "kind": "Backup",
        "metadata": {"name": decl.name, "namespace": namespace},
        "spec": _template(decl),
    }


def render_schedule(decl: BackupScheduleDeclaration, namespace: str) -> dict[str, Any]:
    """Render a Velero ``Schedule`` manifest."""
    return {
        "apiVersion": VELERO_API_VERSION,
        "kind": "Schedule",
        "metadata": {"name": decl.name, "namespace": namespace},
        "spec": {
            "schedule": decl.schedule_expression,
            "useOwnerReferencesInBackup": decl.use_owner_references,
            "template": _template(decl),
        },
    }


def wrap_manifest(name: str, manifest: dict[str, Any]) -> dict[str, Any]:
    """Wrap *manifest* in a provider-kubernetes ``Object``.

    Raises:
        ManifestError: If the manifest cannot be JSON-encoded.
    """
    try:
        encoded = json.dumps(manifest, sort_keys=True)
    except (TypeError, ValueError) as e:
        raise ManifestError(f"cannot render {manifest.get('kind', 'backup')} manifest", e) from e

    return {
        "apiVersion": OBJECT_API_VERSION,
        "kind": OBJECT_KIND,
        "metadata": {
            "name": name,
            "annotations": {EXCLUDE_FROM_BACKUP: "true"},
        },
        "spec": {"forProvider": {"manifest": encoded}},
    }


def backup_resource(decl: BackupDeclaration, namespace: str) -> ChildResourceDescriptor:
    """Desired composed resource for a one-shot backup declaration."""
    return ChildResourceDescriptor.from_object(
        wrap_manifest(decl.name, render_backup(decl, namespace))
    )


def schedule_resource(
    decl: BackupScheduleDeclaration, namespace: str
) -> ChildResourceDescriptor:
    """Desired composed resource for a backup schedule declaration."""
    return ChildResourceDescriptor.from_object(
        wrap_manifest(decl.name, render_schedule(decl, namespace))
    )
