"""Application configuration read from the user's configuration directory."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import platformdirs
import tomli_w

APP_DIR_NAME = "zelkova"
CONFIG_FILE_NAME = "config.toml"
DEFAULT_SOCKET_PATH = Path("/tmp/zelkova.sock")

_MISSING = object()


class ConfigError(Exception):
    """Raised when configuration cannot be read, parsed or located."""


def _default_vault_path() -> Path:
    return Path.home() / "Notes"


def _table(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"invalid type for [{name}]: expected a table")
    return value


def _get(table: dict[str, Any], section: str, key: str, kind: type, default: Any = _MISSING) -> Any:
    if key not in table:
        if default is _MISSING:
            raise ConfigError(f"missing field `{key}` in [{section}]")
        return default
    value = table[key]
    if not isinstance(value, kind):
        raise ConfigError(f"invalid type for {section}.{key}: expected {kind.__name__}")
    return value


@dataclass
class NoteConfig:
    """Where notes live and which extension new notes get."""

    vault_path: Path = field(default_factory=_default_vault_path)
    default_extension: str = "md"


@dataclass
class DaemonConfig:
    """Settings for the background daemon."""

    socket_path: Path = DEFAULT_SOCKET_PATH
    index_on_start: bool = True


@dataclass
class McpConfig:
    enabled: bool = True


@dataclass
class EditorBehavior:
    wrap: bool = True


@dataclass
class PreviewBehavior:
    wrap: bool = True


@dataclass
class UiConfig:
    """Theme selection for the user interface."""

    theme: str = "catppuccin"
    mode: str = "dark"
    override_path: str | None = None


def _note_from(table: dict[str, Any]) -> NoteConfig:
    vault = _get(table, "note", "vault_path", str, None)
    return NoteConfig(
        vault_path=Path(vault) if vault is not None else _default_vault_path(),
        default_extension=_get(table, "note", "default_extension", str, "md"),
    )


def _daemon_from(table: dict[str, Any]) -> DaemonConfig:
    socket = _get(table, "daemon", "socket_path", str, None)
    return DaemonConfig(
        socket_path=Path(socket) if socket is not None else DEFAULT_SOCKET_PATH,
        index_on_start=_get(table, "daemon", "index_on_start", bool, True),
    )


def _ui_from(table: dict[str, Any]) -> UiConfig:
    return UiConfig(
        theme=_get(table, "ui", "theme", str),
        mode=_get(table, "ui", "mode", str, "dark"),
        override_path=_get(table, "ui", "override_path", str, None),
    )


@dataclass
class AppConfig:
    """The whole application configuration."""

    note: NoteConfig = field(default_factory=NoteConfig)
    daemon: DaemonConfig = field(default_factory=DaemonConfig)
    mcp: McpConfig = field(default_factory=McpConfig)
    editor: EditorBehavior = field(default_factory=EditorBehavior)
    preview: PreviewBehavior = field(default_factory=PreviewBehavior)
    ui: UiConfig = field(default_factory=UiConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        """Build a configuration from parsed TOML data; missing sections take defaults."""
        if not isinstance(data, dict):
            raise ConfigError("configuration must be a table")
        config = cls()
        if "note" in data:
            config.note = _note_from(_table(data, "note"))
        if "daemon" in data:
            config.daemon = _daemon_from(_table(data, "daemon"))
        if "mcp" in data:
            config.mcp = McpConfig(_get(_table(data, "mcp"), "mcp", "enabled", bool, True))
        if "editor" in data:
            config.editor = EditorBehavior(_get(_table(data, "editor"), "editor", "wrap", bool, True))
        if "preview" in data:
            config.preview = PreviewBehavior(
                _get(_table(data, "preview"), "preview", "wrap", bool, True)
            )
        if "ui" in data:
            config.ui = _ui_from(_table(data, "ui"))
        return config

    def to_dict(self) -> dict[str, Any]:
        ui: dict[str, Any] = {"theme": self.ui.theme, "mode": self.ui.mode}
        if self.ui.override_path is not None:
            ui["override_path"] = self.ui.override_path
        return {
            "note": {
                "vault_path": str(self.note.vault_path),
                "default_extension": self.note.default_extension,
            },
            "daemon": {
                "socket_path": str(self.daemon.socket_path),
                "index_on_start": self.daemon.index_on_start,
            },
            "mcp": {"enabled": self.mcp.enabled},
            "editor": {"wrap": self.editor.wrap},
            "preview": {"wrap": self.preview.wrap},
            "ui": ui,
        }

    @classmethod
    def from_toml(cls, text: str) -> AppConfig:
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(str(exc)) from exc
        return cls.from_dict(data)

    def to_toml(self) -> str:
        return tomli_w.dumps(self.to_dict())

    @classmethod
    def load(cls) -> AppConfig:
        """Read the configuration file, or return defaults when there is none."""
        path = cls.config_path()
        if not path.exists():
            return cls()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"failed to read config from {path}: {exc}") from exc
        try:
            return cls.from_toml(text)
        except ConfigError as exc:
            raise ConfigError(f"failed to parse config at {path}: {exc}") from exc

    @staticmethod
    def config_path() -> Path:
        return Path(platformdirs.user_config_path()) / APP_DIR_NAME / CONFIG_FILE_NAME