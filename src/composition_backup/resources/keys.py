"""Reserved names, annotation keys and label keys.

The two collection names identify engine-owned entries in the desired
resources map.  They are never classified or labeled as ordinary children.
"""

DOMAIN = "service-platform.io"

# Reserved desired-resource names
BACKUP_RESOURCE_NAME = "composition-backup"
SCHEDULE_RESOURCE_NAME = "composition-backup-schedule"
RESERVED_NAMES = frozenset({BACKUP_RESOURCE_NAME, SCHEDULE_RESOURCE_NAME})

# Annotations
BACKUP_DISABLED = f"{DOMAIN}/backup-disabled"
EXCLUDE_FROM_BACKUP = f"{DOMAIN}/exclude-from-backup"
INITIAL_BACKUP_CREATED = f"{DOMAIN}/initial-backup-created"
INITIAL_SCHEDULE_CREATED = f"{DOMAIN}/initial-backup-schedule-created"

# Labels
PART_OF_XR = f"{DOMAIN}/part-of-xr"


def is_reserved(name: str) -> bool:
    """True if *name* is an engine-owned desired-resource name."""
    return name in RESERVED_NAMES
