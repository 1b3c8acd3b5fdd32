"""Fatal evaluation errors.

Every error names the step that failed.  None are retryable within an
evaluation -- the host simply evaluates again on its next cycle.
"""


class BackupFunctionError(Exception):
    """Base class for fatal evaluation errors.

    Attributes:
        step: Short description of the failing step, e.g.
            ``"cannot classify resources"``.
    """

    def __init__(self, step: str, cause: str | BaseException | None = None) -> None:
        self.step = step
        self.cause = cause
        message = step if cause is None else f"{step}: {cause}"
        super().__init__(message)


class InputError(BackupFunctionError):
    """Missing or malformed parent, children or function input."""

    pass


class ClassificationError(BackupFunctionError):
    """A candidate child cannot be turned into a resource key."""

    pass


class SynthesisError(BackupFunctionError):
    """A declaration cannot be constructed (e.g. empty parent name)."""

    pass


class ManifestError(BackupFunctionError):
    """A declaration cannot be rendered into its external representation.

    This is an internal error, not something the user can correct.
    """

    pass
