import pytest

from zelkova.palette import CommandPalette
from zelkova.palette_spec import ArgSpec, CommandSpec, FreeTextArg, SelectArg


@pytest.fixture
def palette():
    commands = [
        CommandSpec.no_arg("Create Note"),
        CommandSpec.with_args("Create Folder", [ArgSpec("Name", FreeTextArg())]),
        CommandSpec.with_args(
            "Move Note",
            [
                ArgSpec("Note", SelectArg(["alpha", "beta"])),
                ArgSpec("Folder", SelectArg(["Inbox", "Work"]), optional=True),
            ],
        ),
    ]
    return CommandPalette(commands)


def test_no_arg_command_runs_immediately(palette):
    assert palette.handle_confirm() == ("Create Note", [])


def test_filter_narrows_commands(palette):
    palette.paste_text("cf")
    assert palette.filtered == [1]
    assert palette.query == "cf"
    assert palette.query_cursor == 2


def test_free_text_argument_flow(palette):
    palette.paste_text("cf")
    assert palette.handle_confirm() is None
    assert palette.arg_index == 0
    assert palette.text_for_range(0, 10) == ""
    palette.paste_text("docs")
    assert palette.handle_confirm() == ("Create Folder", ["docs"])


def test_required_free_text_must_not_be_empty(palette):
    palette.paste_text("cf")
    palette.handle_confirm()
    assert palette.handle_confirm() is None
    assert palette.arg_index == 0


def test_select_arguments_and_optional_empty(palette):
    palette.paste_text("mn")
    assert palette.filtered == [2]
    assert palette.handle_confirm() is None
    assert palette.filtered_arg_options() == ["alpha", "beta"]
    palette.move_selection_down()
    palette.move_selection_down()
    assert palette.arg_selected == 1
    assert palette.handle_confirm() is None
    assert palette.arg_index == 1
    assert palette.arg_values == ["beta"]
    palette.paste_text("zzz")
    assert palette.filtered_arg_options() == []
    assert palette.handle_confirm() == ("Move Note", ["beta", None])


def test_required_select_without_match_is_rejected(palette):
    palette.paste_text("mn")
    palette.handle_confirm()
    palette.paste_text("zzz")
    assert palette.handle_confirm() is None
    assert palette.arg_index == 0


def test_select_filter_resets_selection(palette):
    palette.paste_text("mn")
    palette.handle_confirm()
    palette.move_selection_down()
    palette.paste_text("b")
    assert palette.arg_selected == 0
    assert palette.filtered_arg_options() == ["beta"]


def test_back_closes_from_command_selection(palette):
    assert palette.handle_back() is True


def test_back_from_first_argument_returns_to_commands(palette):
    palette.paste_text("cf")
    palette.handle_confirm()
    palette.paste_text("x")
    assert palette.handle_back() is False
    assert palette.arg_index is None
    assert palette.arg_input == ""
    assert palette.handle_back() is True


def test_back_from_second_argument(palette):
    palette.paste_text("mn")
    palette.handle_confirm()
    palette.handle_confirm()
    assert palette.arg_index == 1
    assert palette.handle_back() is False
    assert palette.arg_index == 0
    assert palette.arg_values == []
    assert palette.arg_cursor == len(palette.arg_input)


def test_backspace_removes_before_cursor(palette):
    palette.paste_text("cfx")
    palette.move_cursor_left()
    palette.handle_backspace()
    assert palette.query == "cx"
    assert palette.query_cursor == 1


def test_backspace_at_start_does_nothing(palette):
    palette.paste_text("cf")
    palette.move_cursor_left()
    palette.move_cursor_left()
    palette.move_cursor_left()
    assert palette.query_cursor == 0
    palette.handle_backspace()
    assert palette.query == "cf"


def test_cursor_right_is_bounded(palette):
    palette.paste_text("cf")
    palette.move_cursor_right()
    assert palette.query_cursor == 2


def test_selection_bounds(palette):
    palette.move_selection_up()
    assert palette.selected == 0
    for _ in range(5):
        palette.move_selection_down()
    assert palette.selected == len(palette.commands) - 1


def test_filter_clamps_selection(palette):
    palette.move_selection_down()
    palette.move_selection_down()
    palette.paste_text("cf")
    assert palette.selected == 0
    assert palette.selected_command.label == "Create Folder"


def test_replace_text_in_range(palette):
    palette.paste_text("create")
    palette.replace_text_in_range((0, 6), "move")
    assert palette.query == "move"
    assert palette.query_cursor == 4
    assert palette.filtered == [2]


def test_text_for_range_is_clamped(palette):
    palette.paste_text("cf")
    assert palette.text_for_range(1, 100) == "f"
    assert palette.text_for_range(50, 100) == ""


def test_insert_in_middle_moves_cursor(palette):
    palette.paste_text("cf")
    palette.move_cursor_left()
    palette.paste_text("r")
    assert palette.query == "crf"
    assert palette.query_cursor == 2