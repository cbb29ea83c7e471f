# SPDX-FileCopyrightText: 2025 The LineageOS Project
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum
from typing import Dict, List

from firmware_finder.utils import Color, color_print


class DiagnosticKind(str, Enum):
    PARSE_ERROR = 'parse-error'
    INSPECT_ERROR = 'inspect-error'
    MISSING = 'missing'
    COPY_ERROR = 'copy-error'
    INVALID_NAME = 'invalid-name'

    def __str__(self):
        return self.value


class Diagnostic:
    def __init__(self, kind: DiagnosticKind, message: str):
        self.kind = kind
        self.message = message

    def __repr__(self):
        return f'Diagnostic({self.kind!s}, {self.message!r})'

    def __str__(self):
        return self.message


class Diagnostics:
    """
    Non-fatal problems found while scanning and reconciling.

    Every diagnostic is printed as soon as it is recorded, so the output
    interleaves with progress lines in the order the problems were found.
    """

    def __init__(self, quiet: bool = False):
        self.__items: List[Diagnostic] = []
        self.__quiet = quiet

    def __len__(self):
        return len(self.__items)

    def __iter__(self):
        return iter(self.__items)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.__items if d.kind == kind]

    def counts(self) -> Dict[DiagnosticKind, int]:
        counts: Dict[DiagnosticKind, int] = {}
        for d in self.__items:
            counts[d.kind] = counts.get(d.kind, 0) + 1
        return counts

    def __add(self, kind: DiagnosticKind, message: str, color: Color):
        self.__items.append(Diagnostic(kind, message))
        if not self.__quiet:
            color_print(message, color=color)

    def parse_error(self, raw_line: str):
        self.__add(
            DiagnosticKind.PARSE_ERROR,
            f'ERROR PARSING: {raw_line.rstrip()}',
            Color.YELLOW,
        )

    def inspect_error(self, module_path: str, reason: str):
        self.__add(
            DiagnosticKind.INSPECT_ERROR,
            f'ERROR INSPECTING: {module_path}: {reason}',
            Color.YELLOW,
        )

    def missing(self, firmware_name: str, module_id: str):
        self.__add(
            DiagnosticKind.MISSING,
            f'Missing: {firmware_name} needed by {module_id}',
            Color.RED,
        )

    def copy_error(self, firmware_name: str, reason: str):
        self.__add(
            DiagnosticKind.COPY_ERROR,
            f'ERROR COPYING: {firmware_name}: {reason}',
            Color.RED,
        )

    def invalid_name(self, firmware_name: str, module_id: str):
        self.__add(
            DiagnosticKind.INVALID_NAME,
            f'Invalid firmware name: {firmware_name} needed by {module_id}',
            Color.YELLOW,
        )
