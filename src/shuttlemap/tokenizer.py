# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import typing

import msgspec

WHITESPACE = " \t\n"
SLASH = "/"
QUOTE = '"'
DELIMITERS = WHITESPACE + SLASH + QUOTE


class Token(msgspec.Struct, frozen=True):
    """One token of a rule line.

    delimiter is the character that ended the token: whitespace, "/" (a
    suffix follows), '"' (the token was a quoted string) or "" at end of
    input or before an opening quote.
    rest is the unconsumed remainder of the line.
    """

    text: str
    delimiter: str
    rest: str

    @property
    def quoted(self):
        return self.delimiter == QUOTE

    @property
    def has_suffix(self):
        return self.delimiter == SLASH


def tokenize_next(remaining: str) -> typing.Optional[Token]:
    pos = 0
    end = len(remaining)
    # leading delimiters are skipped, except that a quote opens a string
    while pos < end and remaining[pos] in DELIMITERS:
        if remaining[pos] == QUOTE:
            close = pos + 1
            while close < end and remaining[close] not in QUOTE + "\n":
                close += 1
            return Token(text=remaining[pos + 1 : close], delimiter=QUOTE, rest=remaining[close + 1 :])
        pos += 1
    start = pos
    while pos < end and remaining[pos] not in DELIMITERS:
        pos += 1
    if pos == start:
        return None
    if pos == end:
        return Token(text=remaining[start:], delimiter="", rest="")
    if remaining[pos] == QUOTE:
        # the quote opens the next token
        return Token(text=remaining[start:pos], delimiter="", rest=remaining[pos:])
    return Token(text=remaining[start:pos], delimiter=remaining[pos], rest=remaining[pos + 1 :])


def tokenize(line: str) -> typing.Iterator[Token]:
    token = tokenize_next(line)
    while token is not None:
        yield token
        token = tokenize_next(token.rest)
