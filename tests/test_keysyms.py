import pytest

from shuttlemap.keysyms import character_symbol, default_resolver, pointer_button
from shuttlemap.strokes import StrokeOp, Symbol


@pytest.fixture(scope="module")
def resolver():
    return default_resolver()


@pytest.mark.parametrize(
    "name,keysym",
    (
        ("XK_Alt_L", 0xFFE9),
        ("Alt_L", 0xFFE9),
        ("XK_a", 0x61),
        ("XK_Page_Up", 0xFF55),
        ("XK_Greek_alpha", 0x7E1),
        ("XK_Button_1", 0x2000001),
        ("XK_Scroll_Down", 0x2000005),
    ),
)
def test_resolve(resolver, name, keysym):
    assert resolver.resolve(name) == Symbol(keysym=keysym)
    assert name in resolver


@pytest.mark.parametrize("name", ("", "XK_", "XK_NotAKey", "Alt-L"))
def test_unresolvable(resolver, name):
    assert resolver.resolve(name) is None


def test_pointer_buttons(resolver):
    assert pointer_button(resolver.resolve("XK_Button_3")) == 3
    assert pointer_button(resolver.resolve("XK_Scroll_Up")) == 4
    assert pointer_button(resolver.resolve("XK_Return")) is None


def test_character_symbols():
    assert character_symbol("q") == Symbol(keysym=0x71)
    assert character_symbol(" ") == Symbol(keysym=0x20)
    assert character_symbol("ß") == Symbol(keysym=0xDF)
    assert character_symbol("→") == Symbol(keysym=0x1002192)


def test_format_ops(resolver):
    alt = resolver.resolve("XK_Alt_L")
    ops = [StrokeOp.press(alt), StrokeOp.press(Symbol(keysym=0x1002192)), StrokeOp.release(alt)]
    assert resolver.format_ops(ops) == "XK_Alt_L/D 0x1002192/D XK_Alt_L/U"
