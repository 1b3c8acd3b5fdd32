"""Pydantic models for engine configuration."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_STORAGE_LOCATION = "default"
DEFAULT_NAMESPACE = "velero-system"


class EngineConfig(BaseModel):
    """Per-evaluation engine configuration.

    Passed explicitly into every evaluation -- there is no process-wide
    default that one request could overwrite for another.

    Accepts the function-input field names (``backupStorageLocation``,
    ``backupSchedule``) as well as the snake_case ones.

    Example:
        >>> EngineConfig.model_validate({"backupSchedule": "0 * * * *"}).schedule_expression
        '0 * * * *'
        >>> EngineConfig(storage_location=None).storage_location
        'default'
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    storage_location: str = Field(
        default=DEFAULT_STORAGE_LOCATION,
        validation_alias=AliasChoices("storage_location", "backupStorageLocation"),
    )
    # Opaque cron-like string, never validated
    schedule_expression: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "schedule_expression", "schedule", "backupSchedule"
        ),
    )
    namespace: str = DEFAULT_NAMESPACE

    @field_validator("storage_location", mode="before")
    @classmethod
    def _default_storage_location(cls, value: str | None) -> str:
        if value is None:
            return DEFAULT_STORAGE_LOCATION
        return value

    @property
    def schedule_enabled(self) -> bool:
        """True if a recurrence expression is configured."""
        return self.schedule_expression is not None
