# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import re
import typing

from .commontypes import DebugFlags
from .strokes import Slot, StrokeSequence


class TranslationSection:
    bindings: dict[Slot, StrokeSequence]

    def __init__(self, name: str, pattern: typing.Optional[re.Pattern[str]] = None):
        self.name = name
        self.pattern = pattern
        self.bindings = {}

    @property
    def is_default(self):
        return self.pattern is None

    def matches(self, window_text: str) -> bool:
        if self.pattern is None:
            return True
        return self.pattern.search(window_text) is not None

    def bind(self, slot: Slot, sequence: StrokeSequence):
        if slot in self.bindings:
            raise KeyError(f"{slot} is already bound in [{self.name}]")
        # an empty sequence leaves the slot to the default section
        if sequence:
            self.bindings[slot] = tuple(sequence)

    def binding(self, slot: Slot) -> typing.Optional[StrokeSequence]:
        return self.bindings.get(slot)

    def __repr__(self):
        pattern = "" if self.pattern is None else self.pattern.pattern
        return f"<TranslationSection [{self.name}] {pattern!r} ({len(self.bindings)} bindings)>"


class TranslationTable:
    """Sections in file order plus the default section.

    The default section is consulted only after every patterned section has
    failed to match, wherever it appears in the file.
    """

    sections: tuple[TranslationSection, ...]

    def __init__(
        self,
        sections: typing.Iterable[TranslationSection] = (),
        default: typing.Optional[TranslationSection] = None,
        debug: DebugFlags = DebugFlags(),
    ):
        self.sections = tuple(sections)
        self.default = default
        self.debug = debug

    def section_for(self, window_text: str) -> typing.Optional[TranslationSection]:
        for section in self.sections:
            if section.is_default:
                continue
            if section.matches(window_text):
                return section
        return self.default

    def resolve(self, section: typing.Optional[TranslationSection], slot: Slot) -> StrokeSequence:
        if section is not None:
            sequence = section.binding(slot)
            if sequence is not None:
                return sequence
        if self.default is not None:
            sequence = self.default.binding(slot)
            if sequence is not None:
                return sequence
        return ()

    def is_bound(self, section: typing.Optional[TranslationSection], slot: Slot) -> bool:
        return len(self.resolve(section, slot)) > 0

    def __len__(self):
        return len(self.sections)

    def __iter__(self):
        return iter(self.sections)
