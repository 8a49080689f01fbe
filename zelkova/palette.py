"""Interactive state of the command palette: command filtering and argument entry."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from zelkova.palette_spec import (
    ArgSpec,
    ArgType,
    CommandSpec,
    FreeTextArg,
    SelectArg,
    fuzzy_match,
    replace_in_string,
)

Invocation = tuple[str, list[str | None]]


@dataclass
class _InputArg:
    index: int
    values: list[str | None] = field(default_factory=list)


class CommandPalette:
    """Pick a command by fuzzy search, then fill in its arguments one by one.

    While no command is chosen, typed text filters the command list. After a
    command with arguments is confirmed, typed text is the current argument's
    value or, for a select argument, filters that argument's options.
    """

    def __init__(self, commands: Iterable[CommandSpec]) -> None:
        self.commands: list[CommandSpec] = list(commands)
        self._phase: _InputArg | None = None

        self.query = ""
        self.query_cursor = 0
        self.filtered: list[int] = list(range(len(self.commands)))
        self.selected = 0

        self.arg_input = ""
        self.arg_cursor = 0
        self.arg_selected = 0

    @property
    def arg_index(self) -> int | None:
        """Index of the argument being entered, or None while choosing a command."""
        return None if self._phase is None else self._phase.index

    @property
    def arg_values(self) -> list[str | None]:
        """Values already given for the chosen command's earlier arguments."""
        return [] if self._phase is None else list(self._phase.values)

    @property
    def selected_command(self) -> CommandSpec | None:
        if 0 <= self.selected < len(self.filtered):
            return self.commands[self.filtered[self.selected]]
        return None

    def _active_text(self) -> str:
        return self.query if self._phase is None else self.arg_input

    def move_cursor_left(self) -> None:
        if self._phase is None:
            self.query_cursor = max(self.query_cursor - 1, 0)
        else:
            self.arg_cursor = max(self.arg_cursor - 1, 0)

    def move_cursor_right(self) -> None:
        if self._phase is None:
            self.query_cursor = min(self.query_cursor + 1, max(len(self.query), self.query_cursor))
        else:
            self.arg_cursor = min(self.arg_cursor + 1, max(len(self.arg_input), self.arg_cursor))

    def _edit(self, text_range: tuple[int, int] | None, new_text: str) -> None:
        if self._phase is None:
            self.query, self.query_cursor = replace_in_string(
                self.query, self.query_cursor, text_range, new_text
            )
            self._update_filter()
        else:
            self.arg_input, self.arg_cursor = replace_in_string(
                self.arg_input, self.arg_cursor, text_range, new_text
            )
            if isinstance(self._current_arg_type(), SelectArg):
                self.arg_selected = 0

    def paste_text(self, text: str) -> None:
        """Insert text at the cursor of the active input."""
        self._edit(None, text)

    def handle_backspace(self) -> None:
        if self._phase is None:
            if self.query_cursor > 0:
                self.query_cursor -= 1
                self.query = self.query[: self.query_cursor] + self.query[self.query_cursor + 1 :]
                self._update_filter()
        elif self.arg_cursor > 0:
            self.arg_cursor -= 1
            self.arg_input = (
                self.arg_input[: self.arg_cursor] + self.arg_input[self.arg_cursor + 1 :]
            )
            if isinstance(self._current_arg_type(), SelectArg):
                self.arg_selected = 0

    def move_selection_up(self) -> None:
        if self._phase is None:
            if self.selected > 0:
                self.selected -= 1
        elif isinstance(self._current_arg_type(), SelectArg) and self.arg_selected > 0:
            self.arg_selected -= 1

    def move_selection_down(self) -> None:
        if self._phase is None:
            if self.selected + 1 < len(self.filtered):
                self.selected += 1
        elif isinstance(self._current_arg_type(), SelectArg):
            if self.arg_selected + 1 < len(self.filtered_arg_options()):
                self.arg_selected += 1

    def _current_spec(self) -> ArgSpec | None:
        if self._phase is None:
            return None
        command = self.selected_command
        if command is None or self._phase.index >= len(command.args):
            return None
        return command.args[self._phase.index]

    def _current_arg_type(self) -> ArgType | None:
        spec = self._current_spec()
        return None if spec is None else spec.arg_type

    def filtered_arg_options(self) -> list[str]:
        """Options of the current select argument that match the typed text."""
        arg_type = self._current_arg_type()
        if not isinstance(arg_type, SelectArg):
            return []
        return [option for option in arg_type.options if fuzzy_match(self.arg_input, option)]

    def _reset_arg_input(self) -> None:
        self.arg_input = ""
        self.arg_cursor = 0
        self.arg_selected = 0

    def handle_confirm(self) -> Invocation | None:
        """Confirm the current step.

        Returns the command label and its argument values once the command is
        ready to run, otherwise None.
        """
        command = self.selected_command
        if command is None:
            return None
        if self._phase is None:
            if not command.args:
                return command.label, []
            self._phase = _InputArg(index=0)
            self._reset_arg_input()
            return None

        spec = self._current_spec()
        if spec is None:
            return None
        value: str | None
        if isinstance(spec.arg_type, SelectArg):
            options = self.filtered_arg_options()
            value = options[self.arg_selected] if self.arg_selected < len(options) else None
            if value is None and not spec.optional:
                return None
        elif isinstance(spec.arg_type, FreeTextArg):
            if self.arg_input:
                value = self.arg_input
            elif spec.optional:
                value = None
            else:
                return None
        else:
            return None
        return self._advance_arg(command, value)

    def _advance_arg(self, command: CommandSpec, value: str | None) -> Invocation | None:
        assert self._phase is not None
        values = [*self._phase.values, value]
        next_index = self._phase.index + 1
        if next_index < len(command.args):
            self._phase = _InputArg(index=next_index, values=values)
            self._reset_arg_input()
            return None
        return command.label, values

    def handle_back(self) -> bool:
        """Step back one stage. Returns True when the palette should close."""
        if self._phase is None:
            return True
        if self._phase.index == 0:
            self._phase = None
            self.arg_input = ""
            self.arg_cursor = 0
            return False
        previous_values = self._phase.values[:-1]
        previous_value = previous_values[-1] if previous_values else None
        self._phase = _InputArg(index=self._phase.index - 1, values=previous_values)
        self.arg_input = previous_value or ""
        self.arg_cursor = len(self.arg_input)
        self.arg_selected = 0
        return False

    def text_for_range(self, start: int, end: int) -> str:
        """Text of the active input between the given positions, clamped to its length."""
        text = self._active_text()
        start = min(start, len(text))
        end = min(end, len(text))
        return text[start:end]

    def replace_text_in_range(self, text_range: tuple[int, int] | None, new_text: str) -> None:
        """Replace a range of the active input, or insert at the cursor when no range."""
        self._edit(text_range, new_text)

    def _update_filter(self) -> None:
        self.filtered = [
            index
            for index, command in enumerate(self.commands)
            if fuzzy_match(self.query, command.label)
        ]
        if self.filtered and self.selected >= len(self.filtered):
            self.selected = len(self.filtered) - 1