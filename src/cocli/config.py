"""Configuration resolution with XDG paths and precedence rules.

This module turns the environment and an optional user config file into the
:class:`~cocli.models.ClientConfig` handed to the API client:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.cocli/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Config file** -- ``<config_dir>/config.json``, deserialised into a
  :class:`~cocli.models.ConfigFile`. Every key is optional.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, the config file and defaults.
* **Credential resolution** -- :func:`resolve_credential` reads the token
  from an environment variable or a file.

The bearer token is mandatory. When it cannot be resolved a
:class:`~cocli.exceptions.ConfigError` is raised before any request is
built.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from cocli.exceptions import ConfigError
from cocli.models import DEFAULT_BASE_URL, ClientConfig, ConfigFile

_APP_NAME = "cocli"
_CONFIG_FILENAME = "config.json"

TOKEN_ENV_VAR = "COMPOSEAPITOKEN"
BASE_URL_ENV_VAR = "COCLI_BASE_URL"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory.

    On Linux/BSD: ``$XDG_CONFIG_HOME/cocli/`` (default ``~/.config/cocli/``).
    On macOS/Windows: ``~/.cocli/``.

    The directory is not created; cocli only ever reads from it.
    """
    if _is_xdg_platform():
        return _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    return _fallback_base_dir()


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/cocli/`` (default ``~/.local/share/cocli/``).
    On macOS/Windows: ``~/.cocli/logs/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Config file ---


def config_file_path() -> Path:
    """Path to the user config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_config_file() -> ConfigFile:
    """Load the user config file.

    Returns:
        The deserialised :class:`~cocli.models.ConfigFile`. If the file
        does not exist, an empty instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = config_file_path()
    if not path.is_file():
        return ConfigFile()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ConfigFile.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid config file at {path}: {exc}") from exc


# --- Precedence resolution ---


def resolve_config(cli_base_url: Optional[str] = None) -> ClientConfig:
    """Resolve the client configuration with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_base_url``)
        2. Environment variables (``COMPOSEAPITOKEN``, ``COCLI_BASE_URL``)
        3. User config file (``~/.config/cocli/config.json``)
        4. Defaults

    Args:
        cli_base_url: Base URL given on the command line, if any.

    Returns:
        The effective :class:`~cocli.models.ClientConfig`.

    Raises:
        ConfigError: If no bearer token can be found or the config file is
            invalid.
    """
    file_cfg = load_config_file()

    token = os.environ.get(TOKEN_ENV_VAR, "")
    if not token and file_cfg.token_source:
        token = resolve_credential(file_cfg.token_source)
    if not token:
        raise ConfigError(f"{TOKEN_ENV_VAR} environment variable not set")

    base_url = file_cfg.base_url or DEFAULT_BASE_URL
    env_base_url = os.environ.get(BASE_URL_ENV_VAR)
    if cli_base_url:
        base_url = cli_base_url
    elif env_base_url:
        base_url = env_base_url

    config = ClientConfig(token=token, base_url=base_url)
    if file_cfg.timeout is not None:
        config.timeout = file_cfg.timeout
    if file_cfg.verify_ssl is not None:
        config.verify_ssl = file_cfg.verify_ssl
    return config


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace

    Args:
        source: The source descriptor string.

    Returns:
        The resolved credential string.

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    raise ConfigError(f"Unknown credential source format: {source}")
