# SPDX-FileCopyrightText: 2025 The LineageOS Project
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import os
from os import path
from typing import Dict, List, Optional, Set, Tuple

from firmware_finder.diagnostics import Diagnostics
from firmware_finder.errors import FilesystemError, InspectorError
from firmware_finder.inspector import Inspector, LineKind
from firmware_finder.utils import join_relative

MODULE_SUFFIX = '.ko'

RequirementMap = Dict[str, List[str]]


def list_dir(dir_path: str) -> List[str]:
    try:
        return os.listdir(dir_path)
    except OSError as e:
        raise FilesystemError(dir_path, e.strerror or str(e)) from e


def inspect_module(
    inspector: Inspector,
    module_path: str,
    firmware_names: List[str],
    diagnostics: Diagnostics,
):
    try:
        for parsed in inspector.firmware(module_path):
            if parsed.kind == LineKind.MALFORMED:
                assert parsed.value is not None
                diagnostics.parse_error(parsed.value)
                continue

            assert parsed.value is not None
            firmware_names.append(parsed.value)
    except InspectorError as e:
        diagnostics.inspect_error(module_path, str(e))


def scan(
    modules_dir: str,
    startdir: str,
    inspector: Inspector,
    diagnostics: Diagnostics,
    subpath: str = '',
    requirements: Optional[RequirementMap] = None,
    module_suffix: str = MODULE_SUFFIX,
    _ancestors: Optional[Set[Tuple[int, int]]] = None,
) -> RequirementMap:
    """
    Collect the firmware required by every module under
    modules_dir/startdir/subpath.

    Modules are keyed by startdir/subpath/name. A module with no firmware
    lines still gets an empty entry. Subdirectories are scanned
    recursively, in directory listing order.
    """
    if requirements is None:
        requirements = {}
    if _ancestors is None:
        _ancestors = set()

    dir_path = path.join(modules_dir, startdir, subpath)
    logging.info('Traversing %s', dir_path)

    entries = list_dir(dir_path)

    st = os.stat(dir_path)
    dir_key = (st.st_dev, st.st_ino)
    _ancestors.add(dir_key)

    for entry in entries:
        entry_path = path.join(dir_path, entry)

        if entry.endswith(module_suffix):
            module_id = join_relative(startdir, subpath, entry)
            firmware_names: List[str] = []
            requirements[module_id] = firmware_names
            inspect_module(
                inspector,
                path.abspath(entry_path),
                firmware_names,
                diagnostics,
            )

        if entry in ('.', '..') or not path.isdir(entry_path):
            continue

        st = os.stat(entry_path)
        if (st.st_dev, st.st_ino) in _ancestors:
            logging.warning('Skipping directory cycle at %s', entry_path)
            continue

        scan(
            modules_dir,
            startdir,
            inspector,
            diagnostics,
            subpath=join_relative(subpath, entry),
            requirements=requirements,
            module_suffix=module_suffix,
            _ancestors=_ancestors,
        )

    _ancestors.discard(dir_key)

    return requirements
