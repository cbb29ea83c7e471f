# SPDX-FileCopyrightText: 2025 The LineageOS Project
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import List, Optional


class FirmwareFinderError(Exception):
    pass


class FilesystemError(FirmwareFinderError):
    def __init__(self, dir_path: str, reason: str):
        super().__init__(f'Failed to list directory "{dir_path}": {reason}')
        self.dir_path = dir_path
        self.reason = reason


class InspectorError(FirmwareFinderError):
    def __init__(
        self,
        cmd: List[str],
        returncode: Optional[int] = None,
        stderr: str = '',
    ):
        cmd_str = ' '.join(cmd)
        s = f'Failed to run command "{cmd_str}"'
        if returncode is not None:
            s += f' (exit code {returncode})'
        if stderr:
            s += f':\n{stderr.rstrip()}'
        super().__init__(s)
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr


class ConfigError(FirmwareFinderError):
    pass
