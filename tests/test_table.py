import re

import pytest

from shuttlemap.strokes import Direction, Slot, StrokeOp, Symbol
from shuttlemap.table import TranslationSection, TranslationTable

A = Symbol(keysym=ord("a"))
B = Symbol(keysym=ord("b"))


def tap(symbol):
    return (StrokeOp.press(symbol), StrokeOp.release(symbol))


@pytest.fixture
def table():
    editor = TranslationSection("Editor", re.compile("Emacs"))
    editor.bind(Slot.jog(Direction.RIGHT), tap(A))
    default = TranslationSection("Default")
    default.bind(Slot.jog(Direction.RIGHT), tap(B))
    default.bind(Slot.shuttle_increment(Direction.LEFT), tap(B))
    return TranslationTable([editor, default], default)


def test_section_lookup(table):
    assert table.section_for("GNU Emacs").name == "Editor"
    assert table.section_for("xterm").name == "Default"


def test_section_binding_wins(table):
    section = table.section_for("GNU Emacs")
    assert table.resolve(section, Slot.jog(Direction.RIGHT)) == tap(A)
    assert table.resolve(section, Slot.shuttle_increment(Direction.LEFT)) == tap(B)
    assert table.resolve(section, Slot.jog(Direction.LEFT)) == ()


def test_is_bound_follows_default(table):
    section = table.section_for("GNU Emacs")
    assert table.is_bound(section, Slot.shuttle_increment(Direction.LEFT))
    assert not table.is_bound(section, Slot.shuttle_increment(Direction.RIGHT))
    assert table.is_bound(None, Slot.jog(Direction.RIGHT))


def test_no_sections():
    table = TranslationTable()
    assert table.section_for("anything") is None
    assert table.resolve(None, Slot.key_down(1)) == ()
    assert len(table) == 0


def test_bind_twice():
    section = TranslationSection("s", re.compile("x"))
    section.bind(Slot.key_down(1), tap(A))
    with pytest.raises(KeyError):
        section.bind(Slot.key_down(1), tap(B))


def test_empty_binding_is_not_stored():
    section = TranslationSection("s")
    section.bind(Slot.key_up(1), ())
    assert section.binding(Slot.key_up(1)) is None
    assert section.is_default
