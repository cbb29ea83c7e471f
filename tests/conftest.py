# SPDX-FileCopyrightText: 2025 The LineageOS Project
# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures.

Module files written by these fixtures contain the text a module inspector
would print for them, so `cat` stands in for modinfo.
"""
import pytest

from firmware_finder.diagnostics import Diagnostics
from firmware_finder.inspector import Inspector

KERNEL_VERSION = '5.10.0-test'


@pytest.fixture
def kernel_version():
    return KERNEL_VERSION


@pytest.fixture
def target(tmp_path):
    target_dir = tmp_path / 'target'
    (target_dir / 'lib' / 'modules' / KERNEL_VERSION).mkdir(parents=True)
    return target_dir


@pytest.fixture
def modules_dir(target):
    return target / 'lib' / 'modules'


@pytest.fixture
def firmware_dir(target):
    return target / 'lib' / 'firmware'


@pytest.fixture
def source_dir(tmp_path):
    source = tmp_path / 'linux-firmware'
    source.mkdir()
    return source


@pytest.fixture
def make_module(modules_dir):
    def _make_module(rel_path, *firmware, extra=''):
        module = modules_dir / KERNEL_VERSION / rel_path
        module.parent.mkdir(parents=True, exist_ok=True)
        lines = [f'filename:       {module}', 'license:        GPL']
        lines.extend(f'firmware:       {name}' for name in firmware)
        text = '\n'.join(lines) + '\n' + extra
        module.write_text(text)
        return module

    return _make_module


@pytest.fixture
def make_firmware():
    def _make_firmware(base_dir, name, data=b'blob'):
        blob = base_dir / name
        blob.parent.mkdir(parents=True, exist_ok=True)
        blob.write_bytes(data)
        return blob

    return _make_firmware


@pytest.fixture
def inspector():
    return Inspector(['cat'])


@pytest.fixture
def diagnostics():
    return Diagnostics()
