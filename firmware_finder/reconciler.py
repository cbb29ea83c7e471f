# SPDX-FileCopyrightText: 2025 The LineageOS Project
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from os import path
from typing import Set

from firmware_finder.diagnostics import Diagnostics
from firmware_finder.scanner import RequirementMap
from firmware_finder.utils import is_contained


class ReconcileStats:
    def __init__(self):
        self.installed = 0
        self.copied = 0
        self.missing = 0
        self.failed = 0

    def __repr__(self):
        return (
            f'ReconcileStats(installed={self.installed}, '
            f'copied={self.copied}, missing={self.missing}, '
            f'failed={self.failed})'
        )


def copy_atomic(src_path: str, dst_path: str):
    """
    Copy src_path to dst_path, creating parent directories.

    The data is written to a temporary file next to the destination and
    renamed into place, so dst_path is either absent or complete.
    """
    dst_dir = path.dirname(dst_path)
    os.makedirs(dst_dir, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(
        prefix=f'.{path.basename(dst_path)}.',
        suffix='.tmp',
        dir=dst_dir,
    )
    try:
        with os.fdopen(fd, 'wb') as dst, open(src_path, 'rb') as src:
            shutil.copyfileobj(src, dst)
        shutil.copymode(src_path, tmp_path)
        os.replace(tmp_path, dst_path)
    except BaseException:
        if path.lexists(tmp_path):
            os.unlink(tmp_path)
        raise


def reconcile(
    requirements: RequirementMap,
    installed_dir: str,
    source_dir: str,
    diagnostics: Diagnostics,
    dry_run: bool = False,
) -> ReconcileStats:
    stats = ReconcileStats()
    planned: Set[str] = set()

    for module_id, firmware_names in requirements.items():
        for firmware_name in firmware_names:
            if not is_contained(installed_dir, firmware_name) or \
                    not is_contained(source_dir, firmware_name):
                diagnostics.invalid_name(firmware_name, module_id)
                stats.failed += 1
                continue

            installed_path = path.join(installed_dir, firmware_name)
            source_path = path.join(source_dir, firmware_name)

            if path.exists(installed_path) or firmware_name in planned:
                logging.debug('Found: %s', firmware_name)
                stats.installed += 1
                continue

            if not path.exists(source_path):
                diagnostics.missing(firmware_name, module_id)
                stats.missing += 1
                continue

            if dry_run:
                print(f'Would install: {firmware_name}')
                planned.add(firmware_name)
                stats.copied += 1
                continue

            logging.info('Install: %s', firmware_name)
            try:
                copy_atomic(source_path, installed_path)
            except OSError as e:
                diagnostics.copy_error(firmware_name, e.strerror or str(e))
                stats.failed += 1
                continue

            stats.copied += 1

    return stats
