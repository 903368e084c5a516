"""
Configuration loader — where things go and what gets installed.

Every path the bootstrapper touches is derived from ``home``. Defaults
reproduce the standard Neovim layout; a YAML file named by the
``LAZYBOOT_CONFIG`` env var may override any field::

    home: /home/me
    starter_repo: https://github.com/me/my-starter
    fonts:
      JetBrainsMono: https://github.com/ryanoasis/nerd-fonts/releases/download/v3.4.0/JetBrainsMono.zip

Relative paths are resolved against ``home``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from lazyboot.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LAZYBOOT_CONFIG"

_NERD_FONTS = "https://github.com/ryanoasis/nerd-fonts/releases/download/v3.4.0"


class BootstrapConfig(BaseModel):
    """Resolved bootstrap settings."""

    home: Path = Field(default_factory=Path.home)

    config_root: Path = Path(".config/nvim")
    venv_dir: Path = Path(".local/share/lazyboot/venv")
    tags_dir: Path = Path(".cache/tags")
    font_dir: Path = Path(".local/share/fonts")
    mason_dir: Path = Path(".local/share/nvim/mason")
    state_file: Path = Path(".local/state/lazyboot/last-run.json")

    backup_targets: list[Path] = Field(default_factory=lambda: [
        Path(".config/nvim"),
        Path(".local/share/nvim"),
        Path(".local/state/nvim"),
        Path(".cache/nvim"),
    ])

    starter_repo: str = "https://github.com/LazyVim/starter"
    starter_archive_url: str = "https://github.com/LazyVim/starter/archive/refs/heads/main.tar.gz"

    fonts: dict[str, str] = Field(default_factory=lambda: {
        "AdwaitaMono": f"{_NERD_FONTS}/AdwaitaMono.zip",
        "AnonymousPro": f"{_NERD_FONTS}/AnonymousPro.zip",
    })
    python_tools: list[str] = Field(default_factory=lambda: [
        "black", "isort", "flake8", "pylint", "djlint",
    ])
    npm_packages: list[str] = Field(default_factory=lambda: [
        "prettier", "typescript-language-server", "vscode-langservers-extracted",
    ])

    @model_validator(mode="after")
    def _resolve_paths(self) -> BootstrapConfig:
        self.home = self.home.expanduser()
        for field in ("config_root", "venv_dir", "tags_dir", "font_dir", "mason_dir", "state_file"):
            setattr(self, field, self._under_home(getattr(self, field)))
        self.backup_targets = [self._under_home(p) for p in self.backup_targets]
        return self

    def _under_home(self, path: Path) -> Path:
        path = path.expanduser()
        return path if path.is_absolute() else self.home / path

    @property
    def global_tags(self) -> Path:
        return self.tags_dir / "global_tags"

    @property
    def venv_python(self) -> Path:
        return self.venv_dir / "bin" / "python3"


def load_config(path: Path | None = None) -> BootstrapConfig:
    """Load bootstrap configuration.

    Args:
        path: Explicit YAML file. If None, uses ``$LAZYBOOT_CONFIG``;
            if that is unset too, returns the defaults.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return BootstrapConfig()
        path = Path(env_path).expanduser()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading bootstrap config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = BootstrapConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid bootstrap configuration: {e}") from e

    logger.debug("Loaded config for home %s", config.home)
    return config
