"""Resource classification using set operations.

Turns the desired composed resources into the set of resource keys a
backup should include, and labels every ordinary child with the parent's
correlation key.  Pure logic -- no I/O.

Usage:
    from composition_backup.engine.classifier import classify, label_children

    children = label_children(children, parent.name)
    kinds = classify(children)
    # ['Deployment.apps', 'Secret.']
"""

import logging
from collections.abc import Mapping

from composition_backup.errors import ClassificationError
from composition_backup.resources.base import ObservedResource
from composition_backup.resources.keys import EXCLUDE_FROM_BACKUP, PART_OF_XR, is_reserved
from composition_backup.resources.models import ChildResourceDescriptor

logger = logging.getLogger(__name__)


def api_group(api_version: str) -> str:
    """Group part of an API version string.

    The core group renders as the empty string.  A malformed version (more
    than one ``/``) also yields the empty group, matching Kubernetes'
    lenient group/version parsing.

    Examples:
        >>> api_group("v1")
        ''
        >>> api_group("apps/v1")
        'apps'
        >>> api_group("a/b/c")
        ''
    """
    if api_version.count("/") != 1:
        return ""
    return api_version.split("/", 1)[0]


def resource_key(resource: ObservedResource) -> str:
    """``"<Kind>.<group>"`` key for a resource.

    Raises:
        ClassificationError: If the resource has no kind.
    """
    api_version, kind = resource.get_api_version_kind()
    if not kind:
        raise ClassificationError("cannot classify resources", f"{api_version or '<none>'} has no kind")
    return f"{kind}.{api_group(api_version)}"


def is_excluded(resource: ObservedResource) -> bool:
    """True if the resource opted out (exact, case-sensitive ``"true"``)."""
    return resource.get_annotations().get(EXCLUDE_FROM_BACKUP) == "true"


def classify(children: Mapping[str, ObservedResource]) -> list[str]:
    """Resource keys eligible for backup.

    Skips the reserved engine-owned names and children that opted out.
    The result is sorted so repeated calls on the same input are equal.

    Args:
        children: Desired composed resources keyed by logical name.

    Returns:
        Sorted, duplicate-free list of ``"<Kind>.<group>"`` keys.

    Raises:
        ClassificationError: If an eligible child has no kind.

    Examples:
        >>> from composition_backup.resources.models import ChildResourceDescriptor as C
        >>> classify({
        ...     "secret": C(api_version="v1", kind="Secret"),
        ...     "cm": C(api_version="v1", kind="ConfigMap",
        ...             annotations={"service-platform.io/exclude-from-backup": "true"}),
        ... })
        ['Secret.']
    """
    keys: set[str] = set()
    for name, child in children.items():
        if is_reserved(name) or is_excluded(child):
            continue
        keys.add(resource_key(child))

    result = sorted(keys)
    logger.debug(f"Classified {len(children)} resources into {result}")
    return result


def label_children(
    children: Mapping[str, ChildResourceDescriptor],
    parent_name: str,
) -> dict[str, ChildResourceDescriptor]:
    """Merge the part-of label into every non-reserved child.

    Existing labels are kept.  Opted-out children are labeled too; they
    are only left out of classification.  Reserved entries are returned
    untouched.

    Returns:
        New mapping with labeled copies; *children* is not modified.
    """
    labeled: dict[str, ChildResourceDescriptor] = {}
    for name, child in children.items():
        if is_reserved(name):
            labeled[name] = child
        else:
            labeled[name] = child.with_labels({PART_OF_XR: parent_name})
    return labeled
