"""Key bindings configuration."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import platformdirs
import tomli_w

from zelkova.config import APP_DIR_NAME, ConfigError

KEYMAP_FILE_NAME = "keymap.toml"
DEFAULT_LEADER = "space"


@dataclass
class BindingConfig:
    """A single key binding, optionally limited to a context."""

    key: str
    action: str
    context: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {"key": self.key, "action": self.action}
        if self.context is not None:
            data["context"] = self.context
        return data


def default_bindings() -> list[BindingConfig]:
    """The bindings used when no keymap file exists."""
    return [
        BindingConfig("ctrl-p", "open_command_palette"),
        BindingConfig("ctrl-shift-f", "search_notes"),
        BindingConfig("ctrl-n", "create_note"),
        BindingConfig("ctrl-s", "save_note"),
        BindingConfig("ctrl-b", "toggle_sidebar"),
        BindingConfig("ctrl-q", "quit"),
    ]


def _binding_from(entry: Any) -> BindingConfig:
    if not isinstance(entry, dict):
        raise ConfigError("invalid binding: expected a table")
    values: dict[str, Any] = {}
    for name in ("key", "action"):
        if name not in entry:
            raise ConfigError(f"missing field `{name}` in binding")
        if not isinstance(entry[name], str):
            raise ConfigError(f"invalid type for binding {name}: expected str")
        values[name] = entry[name]
    context = entry.get("context")
    if context is not None and not isinstance(context, str):
        raise ConfigError("invalid type for binding context: expected str")
    return BindingConfig(values["key"], values["action"], context)


@dataclass
class KeymapConfig:
    """The leader key and the list of key bindings."""

    leader: str = DEFAULT_LEADER
    bindings: list[BindingConfig] = field(default_factory=default_bindings)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KeymapConfig:
        """Build a keymap from parsed TOML; absent bindings mean none at all."""
        if not isinstance(data, dict):
            raise ConfigError("keymap must be a table")
        leader = data.get("leader", DEFAULT_LEADER)
        if not isinstance(leader, str):
            raise ConfigError("invalid type for leader: expected str")
        entries = data.get("bindings", [])
        if not isinstance(entries, list):
            raise ConfigError("invalid type for bindings: expected an array")
        return cls(leader=leader, bindings=[_binding_from(entry) for entry in entries])

    def to_dict(self) -> dict[str, Any]:
        return {
            "leader": self.leader,
            "bindings": [binding.to_dict() for binding in self.bindings],
        }

    @classmethod
    def from_toml(cls, text: str) -> KeymapConfig:
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(str(exc)) from exc
        return cls.from_dict(data)

    def to_toml(self) -> str:
        return tomli_w.dumps(self.to_dict())

    @classmethod
    def load(cls) -> KeymapConfig:
        """Read the keymap file, or return the default keymap when there is none."""
        path = cls.keymap_path()
        if not path.exists():
            return cls()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"failed to read keymap from {path}: {exc}") from exc
        try:
            return cls.from_toml(text)
        except ConfigError as exc:
            raise ConfigError(f"failed to parse keymap at {path}: {exc}") from exc

    @staticmethod
    def keymap_path() -> Path:
        return Path(platformdirs.user_config_path()) / APP_DIR_NAME / KEYMAP_FILE_NAME

    def resolved_bindings(self) -> list[BindingConfig]:
        """Bindings with the word "leader" in keys replaced by the leader key."""
        return [
            BindingConfig(b.key.replace("leader", self.leader), b.action, b.context)
            for b in self.bindings
        ]