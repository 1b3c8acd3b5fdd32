"""Backup declaration value types.

Declarations describe *what* should be backed up; they are plain data and
carry no behavior beyond validation.  Serializing with ``by_alias=True``
yields the camelCase field names hosts consume.

Usage:
    from composition_backup.backup.models import BackupDeclaration, SelectorLabel

    decl = BackupDeclaration(
        name="db-1",
        storage_location="default",
        included_resource_kinds=["Secret.", "Deployment.apps"],
        selector_label=SelectorLabel(value="db-1"),
    )
    decl.model_dump(by_alias=True)["includedResourceKinds"]
    # ['Deployment.apps', 'Secret.']
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from composition_backup.resources.keys import PART_OF_XR


class _Declaration(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class SelectorLabel(_Declaration):
    """Label selector matching children of one parent."""

    key: str = PART_OF_XR
    value: str


class BackupDeclaration(_Declaration):
    """One-shot backup of the parent's children."""

    name: str
    storage_location: str
    included_resource_kinds: list[str] = Field(default_factory=list)
    include_cluster_scoped: bool = True
    selector_label: SelectorLabel

    @field_validator("included_resource_kinds")
    @classmethod
    def _normalize_kinds(cls, value: list[str]) -> list[str]:
        # Order carries no meaning; sorted so equal sets compare equal
        return sorted(set(value))


class BackupScheduleDeclaration(BackupDeclaration):
    """Recurring backup; the schedule expression is opaque."""

    schedule_expression: str
    use_owner_references: bool = True
