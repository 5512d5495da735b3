"""Mirror profile configuration.

A profile is a named, stored mirror invocation: source, destination,
mode (copy or link) and flags. Profiles are kept in
~/.config/treemirror/config.toml:

    [profiles.dotfiles]
    source = "~/src/dotfiles"
    destination = "~"
    mode = "link"
    prune_stale = false
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from treemirror.core.paths import get_config_path
from treemirror.filesystem.models import MirrorFlags

logger = logging.getLogger(__name__)

MirrorMode = Literal["copy", "link"]


class MirrorProfile(BaseModel):
    """A stored mirror invocation.

    Attributes:
        source: Source file or directory (``~`` is expanded on use).
        destination: Destination path.
        mode: "copy" duplicates content, "link" creates symlinks.
        exclusive: Fail instead of overwriting existing entries.
        prune_stale: Delete destination entries missing from the source.
        description: Optional free-form note.
    """

    model_config = ConfigDict(extra="forbid")

    source: Annotated[str, Field(min_length=1, description="Source path")]
    destination: Annotated[str, Field(min_length=1, description="Destination path")]
    mode: Annotated[MirrorMode, Field(description="copy or link")] = "copy"
    exclusive: bool = False
    prune_stale: bool = False
    description: str | None = None

    @property
    def source_path(self) -> Path:
        """Source with ``~`` expanded."""
        return Path(self.source).expanduser()

    @property
    def destination_path(self) -> Path:
        """Destination with ``~`` expanded."""
        return Path(self.destination).expanduser()

    @property
    def flags(self) -> MirrorFlags:
        """Mirror flags for this profile."""
        return MirrorFlags(exclusive=self.exclusive, prune_stale=self.prune_stale)


class TreeMirrorConfig(BaseModel):
    """Top-level configuration file model.

    Attributes:
        profiles: Mirror profiles keyed by name.
    """

    model_config = ConfigDict(extra="forbid")

    profiles: dict[str, MirrorProfile] = Field(default_factory=dict)

    @field_validator("profiles")
    @classmethod
    def validate_profile_names(cls, v: dict[str, MirrorProfile]) -> dict[str, MirrorProfile]:
        """Reject empty or whitespace-only profile names."""
        for name in v:
            if not name.strip():
                msg = "Profile names cannot be empty"
                raise ValueError(msg)
        return v

    def get_profile(self, name: str) -> MirrorProfile:
        """Look up a profile by name.

        Raises:
            ProfileNotFoundError: If no profile has that name.
        """
        try:
            return self.profiles[name]
        except KeyError:
            raise ProfileNotFoundError(f"Unknown profile: {name}") from None


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ProfileNotFoundError(ConfigError):
    """Raised when a named profile does not exist."""


def load_config(path: Path | None = None) -> TreeMirrorConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated TreeMirrorConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return TreeMirrorConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> TreeMirrorConfig:
    """Load configuration, treating a missing file as an empty config.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file found, using defaults")
        return TreeMirrorConfig()


def save_config(config: TreeMirrorConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The config object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: TreeMirrorConfig) -> dict[str, object]:
    """Convert the config to a dictionary for TOML serialization.

    TOML has no null, so unset optional fields are dropped.
    """
    return {
        "profiles": {
            name: profile.model_dump(exclude_none=True)
            for name, profile in sorted(config.profiles.items())
        }
    }
