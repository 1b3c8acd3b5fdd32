"""Resource models and the read-only capability protocol.

Usage:
    >>> from composition_backup.resources import ParentResource, ChildResourceDescriptor
    >>> from composition_backup.resources import ObservedResource, Readiness
"""

from composition_backup.resources.base import ObservedResource, Readiness
from composition_backup.resources.models import ChildResourceDescriptor, ParentResource

__all__ = [
    "ObservedResource",
    "Readiness",
    "ParentResource",
    "ChildResourceDescriptor",
]
