"""Command-line control of the background daemon."""

from __future__ import annotations

import argparse
import os
import signal
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

from zelkova.config import AppConfig, ConfigError

DAEMON_EXECUTABLE = "zelkovad"
STATE_DIR_NAME = ".zelkova"
PID_FILE_NAME = "daemon.pid"


class DaemonControlError(Exception):
    """Raised when the daemon cannot be started, stopped or inspected."""


def pid_path(config: AppConfig) -> Path:
    """Location of the file holding the running daemon's process id."""
    return config.note.vault_path / STATE_DIR_NAME / PID_FILE_NAME


def _parse_pid(text: str) -> int:
    try:
        pid = int(text.strip())
    except ValueError as exc:
        raise DaemonControlError("invalid PID") from exc
    if pid <= 0:
        raise DaemonControlError("invalid PID")
    return pid


def _process_running(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    except OSError:
        return False
    return True


def daemon_status(config: AppConfig) -> int | None:
    """Report whether the daemon runs; return its process id, or None."""
    try:
        text = pid_path(config).read_text(encoding="utf-8")
    except OSError:
        text = None
    if text is not None:
        pid = _parse_pid(text)
        if _process_running(pid):
            print(f"Daemon running (PID {pid})")
            print(f"Socket: {config.daemon.socket_path}")
            return pid
    print("Daemon not running")
    return None


def _default_daemon_executable() -> Path:
    return Path(sys.argv[0]).resolve().parent / DAEMON_EXECUTABLE


def daemon_start(config: AppConfig, executable: Path | str | None = None) -> subprocess.Popen:
    """Start the daemon program, by default the one beside this command."""
    daemon_exe = Path(executable) if executable is not None else _default_daemon_executable()
    if not daemon_exe.exists():
        raise DaemonControlError(f"{DAEMON_EXECUTABLE} binary not found at {daemon_exe}")
    try:
        process = subprocess.Popen([str(daemon_exe)])
    except OSError as exc:
        raise DaemonControlError(f"failed to start daemon at {daemon_exe}: {exc}") from exc
    print("Daemon started")
    return process


def daemon_stop(config: AppConfig) -> int:
    """Send the daemon a termination signal; return its process id."""
    try:
        text = pid_path(config).read_text(encoding="utf-8")
    except OSError as exc:
        raise DaemonControlError("daemon PID file not found") from exc
    pid = _parse_pid(text)
    try:
        os.kill(pid, signal.SIGTERM)
    except OSError:
        # The signal is best effort: a process that is already gone is fine.
        pass
    print(f"Daemon stopped (PID {pid})")
    return pid


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="zelkova", description="Zelkova note-taking CLI")
    commands = parser.add_subparsers(dest="command", required=True)
    daemon = commands.add_parser("daemon", help="Manage the daemon")
    actions = daemon.add_subparsers(dest="action", required=True)
    actions.add_parser("status", help="Check if daemon is running")
    actions.add_parser("start", help="Start the daemon")
    actions.add_parser("stop", help="Stop the daemon")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    args = _build_parser().parse_args(argv)
    try:
        config = AppConfig.load()
    except ConfigError as exc:
        print(f"error: failed to load config: {exc}", file=sys.stderr)
        return 1

    handlers = {
        "status": daemon_status,
        "start": daemon_start,
        "stop": daemon_stop,
    }
    try:
        handlers[args.action](config)
    except DaemonControlError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())