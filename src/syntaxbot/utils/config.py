"""Configuration management for syntax-bot."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)


# ============================================================================
# Configuration Models
# ============================================================================


class ManagerConfig(BaseModel):
    """
    Dispatcher settings for a command manager.

    Frozen: a built manager keeps the snapshot it was built with, and a
    changed config only takes effect on the next build.
    """

    model_config = ConfigDict(frozen=True)

    name: str = "All"
    prefixes: tuple[str, ...] = ("!",)
    prefix_case_sensitive: bool = False
    require_prefix_in_dm: bool = True
    require_prefix_in_server: bool = True
    allow_direct_messages: bool = True
    allow_server_messages: bool = True
    allow_bot_events: bool = False
    send_unknown_command_error: bool = True
    command_list_prompts: tuple[str, ...] = ("command", "commands")
    commands_per_page: int = Field(default=10, gt=0)
    command_list_footer: str | None = None
    prefix_replacement: bool = True
    replacements: dict[str, str] = Field(default_factory=dict)

    @field_validator("prefixes")
    @classmethod
    def prefixes_not_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v or any(not prefix for prefix in v):
            raise ValueError("at least one non-empty prefix is required")
        return v

    @property
    def main_prefix(self) -> str:
        return self.prefixes[0]


class DiscordConfig(BaseModel):
    """Discord platform configuration."""

    enabled: bool = True
    bot_token: str
    channel_id: str | None = None
    allowed_user_ids: list[str] = Field(default_factory=list)


class MessageBusConfig(BaseModel):
    """Message bus configuration."""

    enabled: bool = False
    default_platform: str | None = None
    discord: DiscordConfig | None = None

    @model_validator(mode="after")
    def validate_default_platform(self) -> "MessageBusConfig":
        """Validate default_platform is configured when enabled."""
        if self.enabled:
            if not self.default_platform:
                raise ValueError(
                    "default_platform is required when messagebus is enabled"
                )
            if self.default_platform != "discord":
                raise ValueError(f"Invalid default_platform: {self.default_platform}")
            if not self.discord:
                raise ValueError(
                    "default_platform is 'discord' but discord config is missing"
                )

        return self


# ============================================================================
# Main Configuration Class
# ============================================================================


class Config(BaseModel):
    """
    Main configuration for syntax-bot.

    Configuration is loaded from ~/.syntax-bot/:
    1. config.user.yaml - User configuration
    2. config.runtime.yaml - Runtime state (optional, overrides user)

    Runtime config takes precedence over user config. Pydantic defaults are used
    for optional fields not specified in config files.
    """

    workspace: Path
    commands_path: Path = Field(default=Path("commands"))
    logging_path: Path = Field(default=Path(".logs"))
    handler_modules: list[str] = Field(default_factory=list)
    manager: ManagerConfig = Field(default_factory=ManagerConfig)
    messagebus: MessageBusConfig = Field(default_factory=MessageBusConfig)

    @model_validator(mode="after")
    def resolve_paths(self) -> "Config":
        """Resolve relative paths to absolute using workspace."""
        for field_name in ("commands_path", "logging_path"):
            path = getattr(self, field_name)
            if path.is_absolute():
                raise ValueError(f"{field_name} must be relative, got: {path}")
            setattr(self, field_name, self.workspace / path)
        return self

    @classmethod
    def load(cls, workspace_dir: Path) -> "Config":
        """
        Load configuration from a workspace directory.

        Args:
            workspace_dir: Path to the workspace directory

        Returns:
            Config instance with all settings loaded and validated

        Raises:
            ValidationError: If configuration is invalid
        """
        return cls.model_validate(cls._read_config_data(workspace_dir))

    @classmethod
    def _read_config_data(cls, workspace_dir: Path) -> dict[str, Any]:
        config_data: dict[str, Any] = {"workspace": workspace_dir}

        for filename in ("config.user.yaml", "config.runtime.yaml"):
            config_file = workspace_dir / filename
            if config_file.exists():
                with open(config_file) as f:
                    file_data = yaml.safe_load(f) or {}
                config_data = cls._deep_merge(config_data, file_data)

        return config_data

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """
        Deep merge override dict into base dict.

        Args:
            base: Base dictionary
            override: Override dictionary (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    @staticmethod
    def _set_nested(obj: dict, key: str, value: Any) -> None:
        """Set a nested value in a dict using dot notation."""
        keys = key.split(".")
        for k in keys[:-1]:
            if k not in obj or not isinstance(obj[k], dict):
                obj[k] = {}
            obj = obj[k]
        obj[keys[-1]] = value

    def set_runtime(self, key: str, value: Any) -> None:
        """
        Update a runtime value in config.runtime.yaml and reload.

        The file is left as it was if the new value does not validate.

        Args:
            key: Config key (supports dot notation, e.g., "manager.prefixes")
            value: New value

        Raises:
            ValidationError: If the resulting configuration is invalid
        """
        config_path = self.workspace / "config.runtime.yaml"
        previous = config_path.read_text() if config_path.exists() else None
        data = (yaml.safe_load(previous) if previous else None) or {}

        self._set_nested(data, key, value)

        with open(config_path, "w") as f:
            yaml.dump(data, f)

        try:
            self.reload()
        except ValidationError:
            if previous is None:
                config_path.unlink()
            else:
                config_path.write_text(previous)
            raise

    def reload(self) -> None:
        """
        Re-read config files from the workspace.

        Raises:
            ValidationError: If the files no longer hold a valid configuration
        """
        new_config = Config.load(self.workspace)
        for field_name in Config.model_fields:
            setattr(self, field_name, getattr(new_config, field_name))
