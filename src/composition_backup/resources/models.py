"""Pydantic models for the composite (parent) and composed (child) resources.

Both models implement the ``ObservedResource`` Protocol and can be built
from, and rendered back to, Kubernetes-style object dicts.

Usage:
    from composition_backup.resources.models import (
        ChildResourceDescriptor,
        ParentResource,
    )

    parent = ParentResource.from_object(observed_composite)
    child = ChildResourceDescriptor.from_object(desired_resource)
    labeled = child.with_labels({"service-platform.io/part-of-xr": parent.name})
"""

import copy
from typing import Any

from pydantic import BaseModel, Field

from composition_backup.resources.base import Readiness


def mapping(value: Any, field: str) -> dict[str, Any]:
    """Return *value* as a mapping; None means empty.

    Raises:
        ValueError: If *value* is present but not a mapping.
    """
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field} must be a mapping, got {type(value).__name__}")
    return value


def _metadata(obj: dict[str, Any]) -> dict[str, Any]:
    return mapping(obj.get("metadata"), "metadata")


def _ready_status(obj: dict[str, Any]) -> str | None:
    """Status of the ``Ready`` condition, or None if not reported.

    Raises:
        ValueError: If ``status`` or its conditions have the wrong shape.
    """
    conditions = mapping(obj.get("status"), "status").get("conditions") or []
    if not isinstance(conditions, list):
        raise ValueError("status.conditions must be a list")
    for condition in conditions:
        condition = mapping(condition, "status.conditions[]")
        if condition.get("type") == "Ready":
            return condition.get("status")
    return None


# ============================================================================
# Parent (composite) resource
# ============================================================================


class ParentResource(BaseModel):
    """The composite resource under protection.

    ``name`` doubles as the correlation key: it names the generated
    declarations and is the value of the part-of label on every child.
    """

    name: str
    api_version: str = ""
    kind: str = ""
    readiness: Readiness = Readiness.UNKNOWN
    annotations: dict[str, str] = Field(default_factory=dict)
    claim_namespace: str | None = None

    @classmethod
    def from_object(cls, obj: dict[str, Any]) -> "ParentResource":
        """Build a parent from an observed composite resource object.

        Reads ``metadata.name``, ``metadata.annotations``, the ``Ready``
        condition and ``spec.claimRef.namespace``.

        Raises:
            ValueError: If a nested field has the wrong shape.
            pydantic.ValidationError: If the object has no usable name or
                annotations are not a string mapping.
        """
        metadata = _metadata(obj)
        claim_ref = mapping(mapping(obj.get("spec"), "spec").get("claimRef"), "spec.claimRef")
        return cls(
            name=metadata.get("name"),
            api_version=obj.get("apiVersion", ""),
            kind=obj.get("kind", ""),
            readiness=Readiness.from_status(_ready_status(obj)),
            annotations=metadata.get("annotations") or {},
            claim_namespace=claim_ref.get("namespace"),
        )

    def to_object(self) -> dict[str, Any]:
        """Render the desired-state view of the parent (identity + annotations)."""
        obj: dict[str, Any] = {
            "metadata": {"name": self.name, "annotations": dict(self.annotations)},
        }
        if self.api_version:
            obj["apiVersion"] = self.api_version
        if self.kind:
            obj["kind"] = self.kind
        return obj

    def with_annotations(self, updates: dict[str, str]) -> "ParentResource":
        """Return a copy with *updates* merged over the existing annotations."""
        return self.model_copy(update={"annotations": {**self.annotations, **updates}})

    # ObservedResource protocol

    def get_name(self) -> str:
        return self.name

    def get_api_version_kind(self) -> tuple[str, str]:
        return self.api_version, self.kind

    def get_labels(self) -> dict[str, str]:
        return {}

    def get_annotations(self) -> dict[str, str]:
        return dict(self.annotations)

    def get_readiness(self) -> Readiness:
        return self.readiness

    def get_claim_namespace(self) -> str | None:
        return self.claim_namespace


# ============================================================================
# Child (composed) resource
# ============================================================================


class ChildResourceDescriptor(BaseModel):
    """A composed resource planned alongside the parent.

    ``body`` keeps the full object so fields the engine does not model
    (spec, metadata.name, ...) survive a parse/render round trip.
    """

    api_version: str = ""
    kind: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    body: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_object(cls, obj: dict[str, Any]) -> "ChildResourceDescriptor":
        """Build a descriptor from a desired composed resource object."""
        metadata = _metadata(obj)
        return cls(
            api_version=obj.get("apiVersion", ""),
            kind=obj.get("kind", ""),
            labels=metadata.get("labels") or {},
            annotations=metadata.get("annotations") or {},
            body=copy.deepcopy(obj),
        )

    def to_object(self) -> dict[str, Any]:
        """Render the descriptor back to an object dict.

        Modeled fields win over whatever ``body`` carries.
        """
        obj = copy.deepcopy(self.body)
        obj["apiVersion"] = self.api_version
        obj["kind"] = self.kind
        metadata = obj.setdefault("metadata", {})
        if self.labels:
            metadata["labels"] = dict(self.labels)
        if self.annotations:
            metadata["annotations"] = dict(self.annotations)
        return obj

    def with_labels(self, updates: dict[str, str]) -> "ChildResourceDescriptor":
        """Return a copy with *updates* merged over the existing labels."""
        return self.model_copy(update={"labels": {**self.labels, **updates}})

    # ObservedResource protocol

    def get_name(self) -> str:
        return _metadata(self.body).get("name", "")

    def get_api_version_kind(self) -> tuple[str, str]:
        return self.api_version, self.kind

    def get_labels(self) -> dict[str, str]:
        return dict(self.labels)

    def get_annotations(self) -> dict[str, str]:
        return dict(self.annotations)

    def get_readiness(self) -> Readiness:
        return Readiness.from_status(_ready_status(self.body))

    def get_claim_namespace(self) -> str | None:
        return None
