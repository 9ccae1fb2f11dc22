# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Compile the rule file into a TranslationTable.

The rule file is a sequence of sections:

    [name] pattern
    K<1..15> output
    S<-7..7> output
    I<L|R> output
    J<L|R> output

When the focused window's title matches pattern, the section is in effect.
A section with an empty pattern is the default section; anything a matching
section leaves unbound is looked up there.

output is a whitespace separated list of keysym names, each optionally
followed by /D (press), /U (release) or /H (hold until the very end), and
double-quoted strings whose characters are typed one after another. Key
slots may split their output with RELEASE: what comes before is sent when the
key goes down, what comes after when it comes back up.

    K1 "qwer"
    K2 XK_Right
    K3 XK_Alt_L/D XK_Right
    K4 "V" XK_Left XK_Page_Up "v"
    K5 XK_Alt_L/D "v" XK_Alt_L/U "x" RELEASE "q"

Nothing in a rule file is fatal. Problems are reported as Diagnostics and the
smallest enclosing unit (token, line or section) is skipped.
"""
from __future__ import annotations

import dataclasses
import logging
import re
import typing

import msgspec

from .builder import BuiltSequence, StrokeToken, build_sequence
from .commontypes import DebugFlags
from .keysyms import KeysymResolver, character_symbol, default_resolver
from .strokes import MAX_SHUTTLE, MIN_SHUTTLE, NUM_KEYS, Direction, Slot
from .table import TranslationSection, TranslationTable
from .tokenizer import tokenize_next

logger = logging.getLogger(__name__)

DESIGNATOR_MATCHER = re.compile(r"(?:(?P<kind>[KkSs])(?P<number>[+-]?\d+)|(?P<dirkind>[IiJj])(?P<direction>[LlRr]))")
RELEASE_WORD = "RELEASE"
COMMENT = "#"

DEBUG_DIRECTIVES = {
    "DEBUG_REGEX": "regex",
    "DEBUG_STROKES": "strokes",
    "DEBUG_KEYS": "keys",
}

SUFFIX_STEPS = {
    "D": StrokeToken.down,
    "U": StrokeToken.up,
    "H": StrokeToken.hold,
}


class Diagnostic(msgspec.Struct, frozen=True):
    line: int
    message: str
    section: typing.Optional[str] = None
    designator: typing.Optional[str] = None

    def __str__(self):
        where = f"line {self.line}"
        if self.section is not None:
            where += f" [{self.section}]"
            if self.designator is not None:
                where += self.designator
        return f"{where}: {self.message}"


class CompileResult(msgspec.Struct):
    table: TranslationTable
    diagnostics: list[Diagnostic]


class SlotTarget(msgspec.Struct, frozen=True):
    "Where a slot line's output goes: one slot, or a press/release pair for key slots."

    slot: Slot
    release_slot: typing.Optional[Slot] = None

    @property
    def is_key(self):
        return self.release_slot is not None


def parse_designator(text: str) -> typing.Optional[SlotTarget]:
    match = DESIGNATOR_MATCHER.fullmatch(text)
    if match is None:
        return None
    if match["dirkind"] is not None:
        direction = Direction.from_letter(match["direction"])
        if match["dirkind"].upper() == "J":
            return SlotTarget(slot=Slot.jog(direction))
        return SlotTarget(slot=Slot.shuttle_increment(direction))
    number = int(match["number"])
    if match["kind"].upper() == "K":
        if not 1 <= number <= NUM_KEYS:
            return None
        return SlotTarget(slot=Slot.key_down(number), release_slot=Slot.key_up(number))
    if not MIN_SHUTTLE <= number <= MAX_SHUTTLE:
        return None
    return SlotTarget(slot=Slot.shuttle(number))


class ConfigCompiler:
    """Single-use compiler for one load of a rule file."""

    sections: list[TranslationSection]
    diagnostics: list[Diagnostic]
    current: typing.Optional[TranslationSection]
    defined: set[str]

    def __init__(self, resolver: typing.Optional[KeysymResolver] = None, debug: DebugFlags = DebugFlags()):
        self.resolver = resolver if resolver is not None else default_resolver()
        self.debug = debug
        self.sections = []
        self.default = None
        self.diagnostics = []
        self.current = None
        self.discarding = False
        self.defined = set()
        self.lineno = 0

    def report(self, message: str, designator: typing.Optional[str] = None):
        section = self.current.name if self.current is not None else None
        diagnostic = Diagnostic(line=self.lineno, message=message, section=section, designator=designator)
        logger.warning("%s", diagnostic)
        self.diagnostics.append(diagnostic)

    def compile(self, text: str) -> CompileResult:
        for lineno, line in enumerate(text.splitlines(), start=1):
            self.lineno = lineno
            self.compile_line(line)
        table = TranslationTable(self.sections, self.default, self.debug)
        return CompileResult(table=table, diagnostics=self.diagnostics)

    def compile_line(self, line: str):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT):
            return
        if stripped.startswith("["):
            self.open_section(stripped)
            return

        first = tokenize_next(stripped)
        if first is None:
            return
        if first.text in DEBUG_DIRECTIVES and not first.quoted:
            self.debug = dataclasses.replace(self.debug, **{DEBUG_DIRECTIVES[first.text]: True})
            return
        if self.current is None:
            if self.discarding:
                logger.debug("line %d: skipping %s in discarded section", self.lineno, first.text)
            else:
                self.report(f"need to start a translation section before defining {first.text}")
            return

        target = parse_designator(first.text) if not first.quoted else None
        if target is None:
            self.report(f"bad key name: {first.text}", designator=first.text)
            return
        designator = target.slot.designator
        if designator in self.defined:
            self.report("can't redefine key", designator=designator)
            return
        self.defined.add(designator)

        tokens = list(self.stroke_tokens(first.rest, target, designator))
        built = build_sequence(tokens, split_halves=target.is_key)
        self.bind(target, built)

    def open_section(self, line: str):
        close = line.find("]")
        self.current = None
        self.defined = set()
        if close < 0:
            self.discarding = True
            self.report(f"unterminated section header: {line}")
            return
        name = line[1:close]
        pattern_text = line[close + 1 :].strip()
        if self.debug.strokes:
            logger.info("------------------------ [%s] %s", name, pattern_text)

        if not pattern_text:
            section = TranslationSection(name)
            if self.default is not None:
                self.report(f"default section [{name}] replaces default section [{self.default.name}]")
            self.default = section
        else:
            try:
                pattern = re.compile(pattern_text)
            except re.error as exc:
                self.discarding = True
                self.report(f"error compiling regex for [{name}]: {exc}")
                return
            section = TranslationSection(name, pattern)

        self.discarding = False
        self.sections.append(section)
        self.current = section

    def stroke_tokens(self, remaining: str, target: SlotTarget, designator: str) -> typing.Iterator[StrokeToken]:
        token = tokenize_next(remaining)
        while token is not None:
            remaining = token.rest
            if token.quoted:
                for ch in token.text:
                    if ch.isprintable():
                        yield StrokeToken.tap(character_symbol(ch))
            elif token.text.startswith(COMMENT):
                return
            elif token.text == RELEASE_WORD:
                if target.is_key:
                    yield StrokeToken.release_boundary()
                else:
                    self.report("RELEASE only applies to key slots, ignored", designator=designator)
                if token.has_suffix:
                    # a suffix on RELEASE means nothing; drop it
                    suffix = tokenize_next(remaining)
                    remaining = suffix.rest if suffix is not None else ""
            elif token.has_suffix:
                suffix = tokenize_next(remaining)
                if suffix is None:
                    self.report(f"missing up/down modifier after {token.text}/", designator=designator)
                    return
                remaining = suffix.rest
                step = SUFFIX_STEPS.get(suffix.text[:1].upper())
                if step is None:
                    self.report(f"invalid up/down modifier: {suffix.text}", designator=designator)
                    step = StrokeToken.down
                symbol = self.resolve(token.text, designator)
                if symbol is not None:
                    yield step(symbol)
            else:
                symbol = self.resolve(token.text, designator)
                if symbol is not None:
                    yield StrokeToken.tap(symbol)
            token = tokenize_next(remaining)

    def resolve(self, name: str, designator: str):
        symbol = self.resolver.resolve(name)
        if symbol is None:
            self.report(f"unrecognized KeySym: {name}", designator=designator)
        return symbol

    def bind(self, target: SlotTarget, built: BuiltSequence):
        self.current.bind(target.slot, built.press)
        if target.release_slot is not None:
            self.current.bind(target.release_slot, built.release)
        if self.debug.strokes:
            logger.info("%s: %s", target.slot, self.resolver.format_ops(built.press))
            if target.release_slot is not None:
                logger.info("%s: %s", target.release_slot, self.resolver.format_ops(built.release))


def compile_config(
    text: str, resolver: typing.Optional[KeysymResolver] = None, debug: DebugFlags = DebugFlags()
) -> CompileResult:
    return ConfigCompiler(resolver, debug).compile(text)
