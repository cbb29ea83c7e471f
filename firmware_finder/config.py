# SPDX-FileCopyrightText: 2025 The LineageOS Project
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import shlex
from typing import Any, Dict, List, Optional, Union

import yaml

from firmware_finder.errors import ConfigError
from firmware_finder.inspector import DEFAULT_INSPECTOR
from firmware_finder.scanner import MODULE_SUFFIX

DEFAULT_FIRMWARE_SOURCE = 'linux-firmware'


def parse_command(value: Union[str, List[str]]) -> List[str]:
    if isinstance(value, str):
        command = shlex.split(value)
    elif isinstance(value, list) and all(isinstance(v, str) for v in value):
        command = list(value)
    else:
        raise ConfigError(f'Invalid inspector command {value!r}')

    if not command:
        raise ConfigError('Inspector command cannot be empty')

    return command


class Config:
    def __init__(
        self,
        inspector: Optional[List[str]] = None,
        module_suffix: str = MODULE_SUFFIX,
        firmware_source: str = DEFAULT_FIRMWARE_SOURCE,
        strict: bool = False,
        dry_run: bool = False,
    ):
        if inspector is None:
            inspector = list(DEFAULT_INSPECTOR)

        self.inspector = inspector
        self.module_suffix = module_suffix
        self.firmware_source = firmware_source
        self.strict = strict
        self.dry_run = dry_run

    # key: expected type
    KEYS = {
        'inspector': (str, list),
        'module_suffix': (str,),
        'firmware_source': (str,),
        'strict': (bool,),
        'dry_run': (bool,),
    }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        kwargs: Dict[str, Any] = {}

        for key, value in data.items():
            if key not in cls.KEYS:
                raise ConfigError(f'Unknown config key "{key}"')

            types = cls.KEYS[key]
            if not isinstance(value, types):
                type_names = ' or '.join(t.__name__ for t in types)
                raise ConfigError(
                    f'Config key "{key}" must be of type {type_names}'
                )

            if key == 'inspector':
                value = parse_command(value)

            kwargs[key] = value

        if 'module_suffix' in kwargs and not kwargs['module_suffix']:
            raise ConfigError('Config key "module_suffix" cannot be empty')

        return cls(**kwargs)

    @classmethod
    def from_file(cls, file_path: str):
        try:
            with open(file_path, 'r') as f:
                data = yaml.load(f, Loader=yaml.SafeLoader)
        except OSError as e:
            raise ConfigError(
                f'Failed to read config "{file_path}": {e.strerror or e}'
            ) from e
        except yaml.YAMLError as e:
            raise ConfigError(f'Failed to parse config "{file_path}": {e}') from e

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigError(f'Config "{file_path}" must be a mapping')

        return cls.from_dict(data)
