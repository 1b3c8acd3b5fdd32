"""Tests for engine configuration loading.

Verifies the EngineConfig defaults and aliases, load_engine_config() TOML
loading, and config_from_input() function-input parsing.
"""

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from composition_backup.config.loader import config_from_input, load_engine_config
from composition_backup.config.models import EngineConfig


class TestEngineConfig:
    """Defaults and aliases."""

    def test_defaults(self) -> None:
        config = EngineConfig()

        assert config.storage_location == "default"
        assert config.schedule_expression is None
        assert config.namespace == "velero-system"
        assert config.schedule_enabled is False

    def test_none_storage_location_is_default(self) -> None:
        assert EngineConfig.model_validate({"backupStorageLocation": None}).storage_location == "default"

    def test_input_aliases(self) -> None:
        config = EngineConfig.model_validate(
            {"backupStorageLocation": "aws-primary", "backupSchedule": "0 * * * *"}
        )

        assert config.storage_location == "aws-primary"
        assert config.schedule_expression == "0 * * * *"
        assert config.schedule_enabled is True

    def test_frozen(self) -> None:
        config = EngineConfig()

        with pytest.raises(ValidationError):
            config.storage_location = "other"

    def test_configs_are_independent(self) -> None:
        """One evaluation's storage location never leaks into another's."""
        first = EngineConfig(storage_location="aws-primary")
        second = EngineConfig()

        assert first.storage_location == "aws-primary"
        assert second.storage_location == "default"


class TestLoadEngineConfig:
    """TOML loading."""

    def test_full_file(self, tmp_path: Path) -> None:
        path = tmp_path / "backup.toml"
        path.write_text(
            textwrap.dedent(
                """\
                [backup]
                storage_location = "aws-primary"
                schedule = "0 */6 * * *"
                namespace = "backups"
                """
            )
        )

        config = load_engine_config(path)

        assert config.storage_location == "aws-primary"
        assert config.schedule_expression == "0 */6 * * *"
        assert config.namespace == "backups"

    def test_missing_section_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "backup.toml"
        path.write_text("[other]\nkey = 1\n")

        assert load_engine_config(path) == EngineConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Engine config not found"):
            load_engine_config(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "backup.toml"
        path.write_text("[backup\n")

        with pytest.raises(ValueError, match="Invalid TOML"):
            load_engine_config(path)

    def test_backup_not_a_table(self, tmp_path: Path) -> None:
        path = tmp_path / "backup.toml"
        path.write_text('backup = "x"\n')

        with pytest.raises(ValueError, match="must be a table"):
            load_engine_config(path)

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        path = tmp_path / "backup.toml"
        path.write_text('[backup]\nstorage_location = "s3"\n')

        assert load_engine_config(str(path)).storage_location == "s3"


class TestConfigFromInput:
    """Function input parsing."""

    def test_none_gives_defaults(self) -> None:
        assert config_from_input(None) == EngineConfig()

    def test_input_object(self) -> None:
        config = config_from_input(
            {
                "apiVersion": "fn.service-platform.io/v1beta1",
                "kind": "Backup",
                "metadata": {"name": "backup"},
                "backupStorageLocation": "aws-primary",
                "backupSchedule": "@daily",
            }
        )

        assert config.storage_location == "aws-primary"
        assert config.schedule_expression == "@daily"

    def test_wrong_kind_rejected(self) -> None:
        with pytest.raises(ValueError, match="unexpected function input"):
            config_from_input({"apiVersion": "fn.service-platform.io/v1beta1", "kind": "Other"})

    def test_wrong_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            config_from_input({"backupSchedule": 5})

    @pytest.mark.parametrize("obj", ["oops", ["backupSchedule"], 5])
    def test_non_mapping_rejected(self, obj) -> None:
        with pytest.raises(ValueError, match="function input must be a mapping"):
            config_from_input(obj)
