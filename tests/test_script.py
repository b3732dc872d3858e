import pytest

from geoconstruct.model import Line
from geoconstruct.script import Command, ScriptError, parse_script, run_script
from geoconstruct.session import ConstructionSession
from geoconstruct.store import ElementStore


def test_parse_commands_and_comments():
    commands = parse_script(
        """
        # setup
        zoom 2.5
        tool line   # draw
        click 0 -1
        key z ctrl
        key Z ctrl shift
        undo
        """
    )
    assert [c.kind for c in commands] == ["zoom", "tool", "click", "key", "key", "undo"]
    assert commands[0].args == (2.5,)
    assert commands[2] == Command("click", 5, (0.0, -1.0))
    assert commands[3].args == ("z", True, False)
    assert commands[4].args == ("Z", True, True)


@pytest.mark.parametrize(
    "text, message",
    [
        ("click 1", "[line 1] click expects x and y"),
        ("\nmove a 2", "[line 2] expected a number"),
        ("tool hammer", "[line 1] tool expects one of"),
        ("zoom 0", "[line 1] zoom must be positive"),
        ("key", "[line 1] key expects a key name"),
        ("key z alt", "[line 1] unknown key modifier 'alt'"),
        ("undo now", "[line 1] undo takes no arguments"),
        ("\n\njump 1 2", "[line 3] unknown command 'jump'"),
    ],
)
def test_parse_errors_carry_line_numbers(text, message):
    with pytest.raises(ScriptError) as excinfo:
        parse_script(text)
    assert str(excinfo.value).startswith(message)


def test_script_error_is_value_error():
    with pytest.raises(ValueError):
        parse_script("bogus")


def test_run_script_drives_session():
    store = ElementStore()
    session = ConstructionSession(store)
    run_script(
        parse_script(
            "zoom 10\ntool line\nclick 0 0\nclick 10 0\nundo\nredo\n"
            "tool circle\nclick 0 0\ncancel\nclear\nundo\n"
        ),
        session,
    )
    assert session.zoom == 10.0
    assert store.pending is None
    assert len([el for el in store.elements if isinstance(el, Line)]) == 1
    assert store.can_redo


def test_tool_command_drops_pending():
    store = ElementStore()
    session = ConstructionSession(store)
    run_script(parse_script("zoom 10\ntool line\nclick 0 0\ntool point"), session)
    assert store.pending is None
    assert store.selected_tool == "point"
    assert store.elements == ()
