"""Host boundary: read the request, run one evaluation, write the response.

The engine itself knows nothing about transport.  A host implements the
``FunctionHost`` Protocol; ``RequestHost`` is the in-process implementation
over a composition-function style request/response envelope::

    {
        "input": {"apiVersion": "fn.service-platform.io/v1beta1", "kind": "Backup",
                  "backupStorageLocation": "default", "backupSchedule": "0 * * * *"},
        "observed": {"composite": {"resource": {...}}},
        "desired": {"resources": {"<name>": {"resource": {...}}}}
    }

Usage:
    from composition_backup.function import RequestHost, run_function

    host = RequestHost(request)
    result = run_function(host)
    if not result.success:
        print(result.error)
    response = host.response
"""

import copy
import logging
from typing import Any, Protocol

from pydantic import BaseModel, Field

from composition_backup.config.loader import config_from_input
from composition_backup.config.models import EngineConfig
from composition_backup.engine.decision import BackupState, evaluate
from composition_backup.errors import BackupFunctionError, InputError
from composition_backup.resources.models import (
    ChildResourceDescriptor,
    ParentResource,
    mapping,
)

logger = logging.getLogger(__name__)

SEVERITY_FATAL = "SEVERITY_FATAL"


class FunctionHost(Protocol):
    """Collaborators the host provides for one evaluation."""

    def get_observed_parent(self) -> ParentResource:
        """Observed parent; raises ``InputError`` if missing or malformed."""
        ...

    def get_candidate_children(self) -> dict[str, ChildResourceDescriptor]:
        """Desired composed resources; raises ``InputError`` if malformed."""
        ...

    def get_engine_configuration(self) -> EngineConfig:
        """Engine configuration; raises ``InputError`` if malformed."""
        ...

    def set_updated_parent(self, parent: ParentResource) -> None: ...

    def set_updated_children(self, children: dict[str, ChildResourceDescriptor]) -> None: ...

    def set_fatal(self, message: str) -> None:
        """Report a fatal, non-retryable result for this evaluation."""
        ...


class RunResult(BaseModel):
    """Result of run_function()."""

    success: bool
    state: BackupState | None = None
    included_resource_kinds: list[str] = Field(default_factory=list)
    schedule_expression: str | None = None
    error: str | None = None


# ============================================================================
# Request envelope host
# ============================================================================


class RequestHost:
    """``FunctionHost`` over a request dict, accumulating a response dict.

    The response starts as a copy of the request's desired state, so an
    evaluation that sets nothing returns the desired state unchanged.
    """

    def __init__(self, request: dict[str, Any]) -> None:
        self.request = request
        desired = request.get("desired")
        desired = copy.deepcopy(desired) if isinstance(desired, dict) else {}
        desired.setdefault("resources", {})
        self.response: dict[str, Any] = {"desired": desired, "results": []}

    # pydantic.ValidationError is a ValueError, so one except clause covers
    # both wrong shapes and wrong field values.

    def get_observed_parent(self) -> ParentResource:
        step = "cannot get observed composite resource"
        try:
            observed = mapping(self.request.get("observed"), "observed")
            obj = mapping(observed.get("composite"), "observed.composite").get("resource")
            if not obj:
                raise InputError(step, "request has none")
            return ParentResource.from_object(mapping(obj, "observed.composite.resource"))
        except ValueError as e:
            raise InputError(step, e) from e

    def get_candidate_children(self) -> dict[str, ChildResourceDescriptor]:
        step = "cannot get desired composed resources"
        try:
            desired = mapping(self.request.get("desired"), "desired")
            resources = mapping(desired.get("resources"), "desired.resources")
        except ValueError as e:
            raise InputError(step, e) from e

        children: dict[str, ChildResourceDescriptor] = {}
        for name, entry in resources.items():
            if not isinstance(entry, dict) or not isinstance(entry.get("resource"), dict):
                raise InputError(step, f"{name!r} has no resource")
            try:
                children[name] = ChildResourceDescriptor.from_object(entry["resource"])
            except ValueError as e:
                raise InputError(step, f"{name!r}: {e}") from e
        return children

    def get_engine_configuration(self) -> EngineConfig:
        try:
            return config_from_input(self.request.get("input"))
        except ValueError as e:
            raise InputError("cannot get function input", e) from e

    def set_updated_parent(self, parent: ParentResource) -> None:
        self.response["desired"]["composite"] = {"resource": parent.to_object()}

    def set_updated_children(self, children: dict[str, ChildResourceDescriptor]) -> None:
        resources = self.response["desired"]["resources"]
        for name, child in children.items():
            entry = resources.setdefault(name, {})
            entry["resource"] = child.to_object()

    def set_fatal(self, message: str) -> None:
        self.response["results"].append({"severity": SEVERITY_FATAL, "message": message})


# ============================================================================
# Entry point
# ============================================================================


def run_function(host: FunctionHost, config: EngineConfig | None = None) -> RunResult:
    """Run one evaluation against *host*.

    Nothing is written back to the host unless the whole evaluation
    succeeds and was triggered.  Errors become a fatal result.

    Args:
        host: Request/response collaborator.
        config: Configuration override; when None the host's configuration
            is used.

    Returns:
        RunResult with ``success`` False and ``error`` set on a fatal error.
    """
    try:
        if config is None:
            config = host.get_engine_configuration()
        parent = host.get_observed_parent()
        logger.info(f"Running function for {parent.kind or 'composite'} {parent.name!r}")
        children = host.get_candidate_children()

        result = evaluate(parent, children, config)
    except BackupFunctionError as e:
        logger.warning(f"Fatal result: {e}")
        host.set_fatal(str(e))
        return RunResult(success=False, error=str(e))

    if result.triggered:
        host.set_updated_parent(result.parent)
        host.set_updated_children(result.children)

    return RunResult(
        success=True,
        state=result.state,
        included_resource_kinds=result.included_resource_kinds,
        schedule_expression=result.schedule.schedule_expression if result.schedule else None,
    )
