"""Read-only resource capability protocol.

Defines the ``ObservedResource`` Protocol the decision engine reads
resources through.  The engine never walks arbitrary nested fields of a
generic object -- it only calls the six accessors below.

Usage:
    from composition_backup.resources.base import ObservedResource, Readiness

    def is_ready(resource: ObservedResource) -> bool:
        return resource.get_readiness() is Readiness.TRUE
"""

from enum import Enum
from typing import Protocol


class Readiness(str, Enum):
    """Tri-state readiness signal, mirroring a Kubernetes condition status."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"

    @classmethod
    def from_status(cls, status: str | bool | None) -> "Readiness":
        """Map a condition status to a readiness value.

        Anything other than ``"True"``/``"False"`` (or the matching booleans)
        is ``UNKNOWN``.

        Example:
            >>> Readiness.from_status("True")
            <Readiness.TRUE: 'True'>
            >>> Readiness.from_status(None)
            <Readiness.UNKNOWN: 'Unknown'>
        """
        if status is True or status == "True":
            return cls.TRUE
        if status is False or status == "False":
            return cls.FALSE
        return cls.UNKNOWN


class ObservedResource(Protocol):
    """Narrow read-only view of a resource.

    Accessors return copies; mutating the returned mappings never changes
    the underlying resource.
    """

    def get_name(self) -> str:
        """Resource name (the correlation key for parents)."""
        ...

    def get_api_version_kind(self) -> tuple[str, str]:
        """``(apiVersion, kind)`` pair, e.g. ``("apps/v1", "Deployment")``."""
        ...

    def get_labels(self) -> dict[str, str]:
        """Copy of the label mapping (empty if none)."""
        ...

    def get_annotations(self) -> dict[str, str]:
        """Copy of the annotation mapping (empty if none)."""
        ...

    def get_readiness(self) -> Readiness:
        """Readiness signal; ``UNKNOWN`` when the resource reports none."""
        ...

    def get_claim_namespace(self) -> str | None:
        """Namespace of the claim bound to this resource, if any."""
        ...
