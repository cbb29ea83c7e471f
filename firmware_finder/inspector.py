# SPDX-FileCopyrightText: 2025 The LineageOS Project
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import subprocess
import tempfile
from enum import Enum
from typing import Generator, List, Optional

from firmware_finder.errors import InspectorError

DEFAULT_INSPECTOR = ['modinfo']
FIRMWARE_TOKEN = 'firmware'


class LineKind(Enum):
    FIRMWARE = 'firmware'
    IGNORED = 'ignored'
    MALFORMED = 'malformed'


class ParsedLine:
    def __init__(self, kind: LineKind, value: Optional[str] = None):
        self.kind = kind
        # Firmware name for FIRMWARE, raw line for MALFORMED
        self.value = value

    def __repr__(self):
        return f'ParsedLine({self.kind.name}, {self.value!r})'

    def __eq__(self, other: object):
        if not isinstance(other, ParsedLine):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value


def parse_line(line: str) -> ParsedLine:
    fields = line.strip().split()
    if not fields:
        return ParsedLine(LineKind.IGNORED)

    # modinfo prints "firmware:", bare "firmware" is accepted as well
    token = fields[0]
    if token.endswith(':'):
        token = token[:-1]

    if token != FIRMWARE_TOKEN:
        return ParsedLine(LineKind.IGNORED)

    if len(fields) < 2:
        return ParsedLine(LineKind.MALFORMED, line)

    return ParsedLine(LineKind.FIRMWARE, fields[1])


class Inspector:
    def __init__(self, command: Optional[List[str]] = None):
        if command is None:
            command = DEFAULT_INSPECTOR

        assert command, 'Inspector command cannot be empty'
        self.command = list(command)

    def lines(self, module_path: str) -> Generator[str, None, None]:
        cmd = [*self.command, module_path]
        logging.debug('Running %s', ' '.join(cmd))

        # Only stdout is read while streaming, stderr must not be a pipe
        with tempfile.TemporaryFile() as stderr_file:
            try:
                proc = subprocess.Popen(
                    cmd,
                    stdout=subprocess.PIPE,
                    stderr=stderr_file,
                    text=True,
                    errors='replace',
                )
            except OSError as e:
                raise InspectorError(cmd, stderr=str(e)) from e

            assert proc.stdout is not None
            with proc:
                for line in proc.stdout:
                    yield line

                returncode = proc.wait()

            if returncode != 0:
                stderr_file.seek(0)
                stderr = stderr_file.read().decode(errors='replace')
                raise InspectorError(cmd, returncode, stderr)

    def firmware(self, module_path: str) -> Generator[ParsedLine, None, None]:
        for line in self.lines(module_path):
            parsed = parse_line(line)
            if parsed.kind == LineKind.IGNORED:
                continue

            yield parsed
