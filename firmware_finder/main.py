#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025 The LineageOS Project
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import os
import sys
from argparse import ArgumentParser
from os import path
from typing import List, Optional

from firmware_finder.config import Config, parse_command
from firmware_finder.diagnostics import Diagnostics
from firmware_finder.errors import ConfigError, FirmwareFinderError
from firmware_finder.inspector import Inspector
from firmware_finder.reconciler import reconcile
from firmware_finder.scanner import scan
from firmware_finder.utils import Color, color_print


def parse_args(argv: Optional[List[str]] = None):
    parser = ArgumentParser(
        prog='firmware-finder',
        description='Install the firmware required by kernel modules',
    )
    parser.add_argument(
        'startdir',
        help='Kernel version directory under <targetdir>/lib/modules',
    )
    parser.add_argument(
        'targetdir',
        help='Root of the target installation',
    )
    parser.add_argument(
        '-c', '--config',
        help='YAML file with default options',
    )
    parser.add_argument(
        '-s', '--source',
        help='Directory to copy missing firmware from '
             '(default: linux-firmware)',
    )
    parser.add_argument(
        '-i', '--inspector',
        help='Command used to list module firmware (default: modinfo)',
    )
    parser.add_argument(
        '-n', '--dry-run',
        action='store_true',
        default=None,
        help='Only print the firmware that would be installed',
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        default=None,
        help='Exit with an error if any firmware is missing or any module '
             'could not be parsed',
    )
    parser.add_argument(
        '-v', '--verbosity',
        action='count',
        default=0,
        help='increase output verbosity',
    )

    return parser.parse_args(argv)


def load_config(args) -> Config:
    if args.config is not None:
        config = Config.from_file(args.config)
    else:
        config = Config()

    if args.source is not None:
        config.firmware_source = args.source
    if args.inspector is not None:
        config.inspector = parse_command(args.inspector)
    if args.dry_run is not None:
        config.dry_run = args.dry_run
    if args.strict is not None:
        config.strict = args.strict

    return config


def run(startdir: str, targetdir: str, config: Config) -> int:
    print(f'Starting in {startdir}')
    print(f'Install to {targetdir}')
    os.makedirs(targetdir, exist_ok=True)

    modules_dir = path.join(targetdir, 'lib', 'modules')
    installed_dir = path.join(targetdir, 'lib', 'firmware')

    diagnostics = Diagnostics()
    inspector = Inspector(config.inspector)

    requirements = scan(
        modules_dir,
        startdir,
        inspector,
        diagnostics,
        module_suffix=config.module_suffix,
    )

    stats = reconcile(
        requirements,
        installed_dir,
        config.firmware_source,
        diagnostics,
        dry_run=config.dry_run,
    )

    logging.info(
        'Scanned %d modules: %d installed, %d copied, %d missing, %d failed',
        len(requirements),
        stats.installed,
        stats.copied,
        stats.missing,
        stats.failed,
    )

    if config.strict and len(diagnostics):
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.verbosity >= 2:
        log_level = logging.DEBUG
    elif args.verbosity == 1:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING

    logging.basicConfig(level=log_level)

    try:
        config = load_config(args)
        return run(args.startdir, args.targetdir, config)
    except ConfigError as e:
        color_print(f'Invalid configuration: {e}', color=Color.RED, file=sys.stderr)
        return 1
    except FirmwareFinderError as e:
        color_print(e, color=Color.RED, file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
