# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import pathlib
import typing

from .commontypes import DebugFlags
from .compiler import ConfigCompiler, Diagnostic
from .keysyms import KeysymResolver, default_resolver
from .table import TranslationTable

logger = logging.getLogger(__name__)


class TableLoader:
    """Keeps the translation table in step with the rule file.

    refresh() is called before every lookup. It compares the file's
    modification time with the one seen at the last build and recompiles the
    whole file when it is newer. If the file can't be read the previous table
    stays in effect.
    """

    table: TranslationTable
    diagnostics: list[Diagnostic]

    def __init__(
        self,
        path: pathlib.Path,
        resolver: typing.Optional[KeysymResolver] = None,
        debug: DebugFlags = DebugFlags(),
    ):
        self.path = path
        self.resolver = resolver if resolver is not None else default_resolver()
        self.debug = debug
        self.table = TranslationTable(debug=debug)
        self.diagnostics = []
        self.builds = 0
        self._mtime_ns: typing.Optional[int] = None
        self._last_error: typing.Optional[str] = None

    def _report_error(self, exc: Exception):
        message = f"{self.path}: {exc}"
        if message != self._last_error:
            logger.warning("Unable to read configuration, keeping previous rules: %s", message)
        self._last_error = message

    def refresh(self) -> TranslationTable:
        try:
            stat = self.path.stat()
        except OSError as exc:
            self._report_error(exc)
            return self.table
        # a zero mtime still has to count as newer than "never loaded"
        mtime_ns = stat.st_mtime_ns or 1
        if self._mtime_ns is not None and mtime_ns <= self._mtime_ns:
            return self.table
        self._mtime_ns = mtime_ns

        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self._report_error(exc)
            return self.table

        result = ConfigCompiler(self.resolver, self.debug).compile(text)
        self.table = result.table
        self.diagnostics = result.diagnostics
        self.builds += 1
        self._last_error = None
        logger.debug(
            "Loaded %d sections from %s (%d problems)",
            len(self.table),
            self.path,
            len(self.diagnostics),
        )
        return self.table
