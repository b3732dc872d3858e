"""Plain-text interaction scripts.

One command per line; ``#`` starts a comment::

    zoom 2
    tool line
    click 0 0
    move 10 0
    down 10 0
    up 12 3
    key z ctrl
    undo
    redo
    clear

Scripts stand in for the input-translation layer: coordinates are already in
drawing space.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .session import ConstructionSession
from .store import TOOLS

_POINTER_COMMANDS = {"click", "move", "down", "up"}
_BARE_COMMANDS = {"undo", "redo", "clear", "cancel"}
_KEY_MODIFIERS = {"ctrl", "shift"}


class ScriptError(ValueError):
    pass


@dataclass
class Command:
    kind: str
    line: int
    args: Tuple[object, ...] = field(default_factory=tuple)


def _error(line: int, message: str) -> ScriptError:
    return ScriptError(f"[line {line}] {message}")


def _parse_float(token: str, line: int) -> float:
    try:
        return float(token)
    except ValueError:
        raise _error(line, f"expected a number, got {token!r}") from None


def parse_script(text: str) -> List[Command]:
    commands: List[Command] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        body = raw.split("#", 1)[0].strip()
        if not body:
            continue
        head, *rest = body.split()
        head = head.lower()
        if head in _POINTER_COMMANDS:
            if len(rest) != 2:
                raise _error(lineno, f"{head} expects x and y")
            commands.append(Command(head, lineno, (_parse_float(rest[0], lineno), _parse_float(rest[1], lineno))))
        elif head == "tool":
            if len(rest) != 1 or rest[0] not in TOOLS:
                raise _error(lineno, f"tool expects one of {', '.join(TOOLS)}")
            commands.append(Command(head, lineno, (rest[0],)))
        elif head == "zoom":
            if len(rest) != 1:
                raise _error(lineno, "zoom expects one value")
            value = _parse_float(rest[0], lineno)
            if value <= 0:
                raise _error(lineno, "zoom must be positive")
            commands.append(Command(head, lineno, (value,)))
        elif head == "key":
            if not rest:
                raise _error(lineno, "key expects a key name")
            modifiers = {token.lower() for token in rest[1:]}
            unknown = modifiers - _KEY_MODIFIERS
            if unknown:
                raise _error(lineno, f"unknown key modifier {sorted(unknown)[0]!r}")
            commands.append(Command(head, lineno, (rest[0], "ctrl" in modifiers, "shift" in modifiers)))
        elif head in _BARE_COMMANDS:
            if rest:
                raise _error(lineno, f"{head} takes no arguments")
            commands.append(Command(head, lineno))
        else:
            raise _error(lineno, f"unknown command {head!r}")
    return commands


def run_script(commands: List[Command], session: ConstructionSession) -> None:
    store = session.store
    for cmd in commands:
        if cmd.kind == "click":
            session.click(*cmd.args)  # type: ignore[arg-type]
        elif cmd.kind == "move":
            session.pointer_move(*cmd.args)  # type: ignore[arg-type]
        elif cmd.kind == "down":
            session.pointer_down(*cmd.args)  # type: ignore[arg-type]
        elif cmd.kind == "up":
            session.pointer_up(*cmd.args)  # type: ignore[arg-type]
        elif cmd.kind == "tool":
            session.cancel()
            store.set_selected_tool(str(cmd.args[0]))
        elif cmd.kind == "zoom":
            session.set_zoom(float(cmd.args[0]))  # type: ignore[arg-type]
        elif cmd.kind == "key":
            key, ctrl, shift = cmd.args
            session.key_press(str(key), ctrl=bool(ctrl), shift=bool(shift))
        elif cmd.kind == "undo":
            session.cancel()
            store.undo()
        elif cmd.kind == "redo":
            session.cancel()
            store.redo()
        elif cmd.kind == "clear":
            session.cancel()
            store.clear_canvas()
        elif cmd.kind == "cancel":
            session.cancel()
