# SPDX-FileCopyrightText: 2025 The LineageOS Project
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum
from os import path
from typing import Optional, TextIO


class Color(str, Enum):
    RED = '\033[0;31m'
    GREEN = '\033[0;32m'
    YELLOW = '\033[1;33m'
    END = '\033[0m'


def color_print(*args: object, color: Color, file: Optional[TextIO] = None):
    args_str = ' '.join(str(arg) for arg in args)
    args_str = color.value + args_str + Color.END.value
    print(args_str, file=file)


def join_relative(*parts: str):
    # Skips empty components so a root level entry has no leading slash
    return '/'.join(part.strip('/') for part in parts if part.strip('/'))


def is_contained(base_dir: str, rel_path: str):
    if path.isabs(rel_path):
        return False

    base_dir = path.abspath(base_dir)
    full_path = path.abspath(path.join(base_dir, rel_path))
    return path.commonpath([base_dir, full_path]) == base_dir and full_path != base_dir
