"""composition-backup: decide and synthesize backup declarations.

Given a composite (parent) resource and its desired composed (child)
resources, decides whether a Velero backup -- and optionally a backup
schedule -- should be declared, computes which resource kinds it covers,
and marks the parent so the first creation is not repeated.

Usage:
    from composition_backup import evaluate, EngineConfig, ParentResource
    from composition_backup import RequestHost, run_function
"""

__version__ = "0.1.0"

# Resources
from composition_backup.resources.base import ObservedResource, Readiness
from composition_backup.resources.models import ChildResourceDescriptor, ParentResource

# Config
from composition_backup.config.loader import config_from_input, load_engine_config
from composition_backup.config.models import EngineConfig

# Declarations
from composition_backup.backup.models import (
    BackupDeclaration,
    BackupScheduleDeclaration,
    SelectorLabel,
)

# Engine
from composition_backup.engine.classifier import classify
from composition_backup.engine.decision import BackupState, Evaluation, decide, evaluate

# Errors
from composition_backup.errors import (
    BackupFunctionError,
    ClassificationError,
    InputError,
    ManifestError,
    SynthesisError,
)

# Host boundary
from composition_backup.function import FunctionHost, RequestHost, RunResult, run_function

__all__ = [
    # Resources
    "ObservedResource",
    "Readiness",
    "ParentResource",
    "ChildResourceDescriptor",
    # Config
    "EngineConfig",
    "load_engine_config",
    "config_from_input",
    # Declarations
    "BackupDeclaration",
    "BackupScheduleDeclaration",
    "SelectorLabel",
    # Engine
    "classify",
    "decide",
    "evaluate",
    "BackupState",
    "Evaluation",
    # Errors
    "BackupFunctionError",
    "InputError",
    "ClassificationError",
    "SynthesisError",
    "ManifestError",
    # Host boundary
    "FunctionHost",
    "RequestHost",
    "RunResult",
    "run_function",
]
