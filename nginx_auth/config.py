"""Configuration management for nginx-auth."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from nginx_auth.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from nginx_auth.utils.fileops import secure_atomic_write

DEFAULT_DOC_ROOT = Path("/var/www")
DEFAULT_HTPASSWD_FILE = Path("/etc/seedbox/config/.htpasswd")
DEFAULT_SERVICE = "nginx"
DEFAULT_REALM = "Restricted Area - Authorized Personnel Only"

# Environment variables consulted after the config file
ENV_DOC_ROOT = "NGINX_DOC_ROOT"
ENV_HTPASSWD_FILE = "NGINX_HTPASSWD_FILE"


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "nginx-auth" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        doc_root: Nginx document root. Must already exist.
        htpasswd_file: Basic-Auth credentials file, managed externally.
        service: systemd unit reloaded after setup.
        realm: Realm string used in the ``auth_basic`` directive.
        reload: Whether to reload the service at the end of ``install``.
        use_sudo: Run privileged commands through sudo when not root.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    doc_root: Path = DEFAULT_DOC_ROOT
    htpasswd_file: Path = DEFAULT_HTPASSWD_FILE
    service: str = DEFAULT_SERVICE
    realm: str = DEFAULT_REALM
    reload: bool = True
    use_sudo: bool = True
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        self.doc_root = self.doc_root.expanduser()
        self.htpasswd_file = self.htpasswd_file.expanduser()

        if not self.service.strip():
            raise ConfigValidationError("nginx.service", self.service, "must not be empty")

        # The realm ends up inside a double-quoted nginx string
        if '"' in self.realm:
            raise ConfigValidationError("nginx.realm", self.realm, "must not contain '\"'")

        if not self.htpasswd_file.is_absolute():
            warnings.append(
                f"Credentials file path is relative: {self.htpasswd_file}. "
                f"Nginx resolves relative paths against its prefix directory."
            )

        return warnings


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> tuple[Config, list[str]]:
    """Load configuration from file and environment or use defaults.

    Values are layered: defaults, then the config file, then the
    ``NGINX_DOC_ROOT`` / ``NGINX_HTPASSWD_FILE`` environment variables.

    Args:
        config_path: Explicit config file path. If None, uses default location.
        environ: Environment mapping. If None, uses ``os.environ``.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []
    explicit = config_path is not None

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigParseError(config_path, str(e)) from e
        config = _parse_config_dict(data, config_path)
    else:
        config = Config()
        # The default location is optional; only complain about explicit paths
        if explicit:
            warnings.append(
                f"No config file found at {config_path}. Using defaults. "
                f"Create config with: nginx-auth init-config"
            )

    apply_environment(config, os.environ if environ is None else environ)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def apply_environment(config: Config, environ: Mapping[str, str]) -> None:
    """Override config paths from environment variables.

    Unset and empty variables are both ignored.
    """
    doc_root = environ.get(ENV_DOC_ROOT)
    if doc_root:
        config.doc_root = Path(doc_root)

    htpasswd_file = environ.get(ENV_HTPASSWD_FILE)
    if htpasswd_file:
        config.htpasswd_file = Path(htpasswd_file)


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [paths] section
    paths = data.get("paths", {})
    if "doc_root" in paths:
        value = paths["doc_root"]
        if not isinstance(value, str):
            raise ConfigValidationError("paths.doc_root", value, "must be a string path")
        config.doc_root = Path(value)

    if "htpasswd_file" in paths:
        value = paths["htpasswd_file"]
        if not isinstance(value, str):
            raise ConfigValidationError("paths.htpasswd_file", value, "must be a string path")
        config.htpasswd_file = Path(value)

    # Parse [nginx] section
    nginx = data.get("nginx", {})
    if "service" in nginx:
        value = nginx["service"]
        if not isinstance(value, str):
            raise ConfigValidationError("nginx.service", value, "must be a string")
        config.service = value

    if "realm" in nginx:
        value = nginx["realm"]
        if not isinstance(value, str):
            raise ConfigValidationError("nginx.realm", value, "must be a string")
        config.realm = value

    if "reload" in nginx:
        value = nginx["reload"]
        if not isinstance(value, bool):
            raise ConfigValidationError("nginx.reload", value, "must be a boolean")
        config.reload = value

    # Parse [privileges] section
    privileges = data.get("privileges", {})
    if "use_sudo" in privileges:
        value = privileges["use_sudo"]
        if not isinstance(value, bool):
            raise ConfigValidationError("privileges.use_sudo", value, "must be a boolean")
        config.use_sudo = value

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> Path:
    """Save configuration to file.

    The file is written atomically with 0o600 permissions.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.

    Returns:
        The resolved path that was written.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    data: dict[str, Any] = {
        "paths": {
            "doc_root": str(config.doc_root),
            "htpasswd_file": str(config.htpasswd_file),
        },
        "nginx": {
            "service": config.service,
            "realm": config.realm,
            "reload": config.reload,
        },
        "privileges": {
            "use_sudo": config.use_sudo,
        },
        "display": {
            "colored_output": config.colored_output,
        },
    }

    secure_atomic_write(config_path, tomli_w.dumps(data))
    return config_path
