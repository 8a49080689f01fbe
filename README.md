# zelkova

Tools for working with a vault of Markdown notes:

- **Configuration** (`zelkova.config`): `AppConfig` and its sections
  (`NoteConfig`, `DaemonConfig`, `McpConfig`, `EditorBehavior`,
  `PreviewBehavior`, `UiConfig`). `AppConfig.load()` reads `config.toml` from
  the user configuration directory (`AppConfig.config_path()`) and returns the
  defaults when the file does not exist. Missing sections and most missing
  fields take defaults; a `[ui]` section must give `theme`. Problems raise
  `ConfigError`. `from_toml`/`to_toml` and `from_dict`/`to_dict` convert in
  both directions.
- **Keymaps** (`zelkova.keymap`): `KeymapConfig` and `BindingConfig`, read by
  `KeymapConfig.load()` from `keymap.toml` in the same directory. Without a
  file the leader is `space` and `default_bindings()` applies; a file that
  lists no bindings has none. `resolved_bindings()` puts the configured
  leader key in place of the word `leader` in each key.
- **Vault watching** (`zelkova.watcher`): `scan_files` maps every `.md` file
  below a directory to its modification time, skipping hidden directories.
  `diff_snapshots` lists `FileChange` entries (`ChangeKind.NEW`, `MODIFIED`,
  then `DELETED`). `start_watcher(vault_path, on_change, interval=2.0)` polls
  in a background thread, calls `on_change` for new and modified files, only
  logs deletions, and returns a `threading.Event` that stops it when set.
- **Command palette model** (`zelkova.palette`, `zelkova.palette_spec`):
  `CommandSpec`, `ArgSpec`, `FreeTextArg` and `SelectArg` describe commands
  and their arguments. `CommandPalette` filters commands with `fuzzy_match`,
  then asks for each argument in turn; `handle_confirm()` returns the command
  label and argument values once a command is ready, and `handle_back()`
  steps back, returning `True` when the palette should close. It draws
  nothing: it holds only the state a UI would show.
- **Daemon control** (`zelkova.cli`): `daemon_status`, `daemon_start`,
  `daemon_stop` and `pid_path`, raising `DaemonControlError` on failure, and
  the `zelkova` command built on them.

## Installation

```
pip install .
```

## Configuration

`config.toml` in the user configuration directory (for example
`~/.config/zelkova/config.toml`; the path depends on the platform):

```toml
[note]
vault_path = "/home/me/Notes"
default_extension = "md"

[daemon]
socket_path = "/tmp/zelkova.sock"
index_on_start = true

[ui]
theme = "catppuccin"
mode = "dark"
```

`keymap.toml` in the same directory:

```toml
leader = "ctrl-x"

[[bindings]]
key = "leader f"
action = "search_notes"
```

```python
from zelkova.config import AppConfig
from zelkova.keymap import KeymapConfig

config = AppConfig.load()
print(config.note.vault_path)

keymap = KeymapConfig.load()
for binding in keymap.resolved_bindings():
    print(binding.key, binding.action)
```

## Command line

```
zelkova daemon status
zelkova daemon start
zelkova daemon stop
```

`status` reads the process id from `<vault>/.zelkova/daemon.pid` and reports
whether that process is running, with the socket path when it is. `stop`
sends that process SIGTERM. `start` launches the `zelkovad` executable in the
same directory as the running program and fails if it is not there.

## What this package does not do

It does not contain the note daemon itself: there is no `zelkovad`, no
search index, no vault storage and no socket protocol here. The command line
therefore only starts, stops and checks a daemon installed separately; it
has no commands to search, list, show or create notes, list tags or rebuild
the index. The command palette is a model without a user interface.

## Tests

```
pip install .[test]
pytest
```