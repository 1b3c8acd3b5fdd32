"""Engine configuration loading.

Two sources are supported: a ``backup.toml`` file for local runs, and the
function input object carried in a request envelope.
"""

import tomllib
from pathlib import Path
from typing import Any

from composition_backup.config.models import EngineConfig

INPUT_API_VERSION = "fn.service-platform.io/v1beta1"
INPUT_KIND = "Backup"


def load_engine_config(config_path: Path | str) -> EngineConfig:
    """Load engine configuration from a TOML file.

    Expected layout::

        [backup]
        storage_location = "aws-primary"
        schedule = "0 */6 * * *"
        namespace = "velero-system"

    Args:
        config_path: Path to the TOML file.

    Returns:
        EngineConfig built from the ``[backup]`` table (defaults if absent).

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config format is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Engine config not found: {config_path}")

    with open(config_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path.name}: {e}") from e

    section = data.get("backup", {})
    if not isinstance(section, dict):
        raise ValueError(f"[backup] in {config_path.name} must be a table")

    return EngineConfig.model_validate(section)


def config_from_input(obj: dict[str, Any] | None) -> EngineConfig:
    """Build configuration from a function input object.

    A missing input means defaults.  An input of another kind is rejected
    so a misrouted pipeline step fails loudly.

    Raises:
        ValueError: If the input is not a ``Backup`` input object.
        pydantic.ValidationError: If field values have the wrong type.
    """
    if obj is None:
        return EngineConfig()
    if not isinstance(obj, dict):
        raise ValueError(f"function input must be a mapping, got {type(obj).__name__}")
    if not obj:
        return EngineConfig()

    api_version = obj.get("apiVersion")
    kind = obj.get("kind")
    if api_version not in (None, INPUT_API_VERSION) or kind not in (None, INPUT_KIND):
        raise ValueError(
            f"unexpected function input {api_version}/{kind}, "
            f"want {INPUT_API_VERSION}/{INPUT_KIND}"
        )

    fields = {k: v for k, v in obj.items() if k not in ("apiVersion", "kind", "metadata")}
    return EngineConfig.model_validate(fields)
