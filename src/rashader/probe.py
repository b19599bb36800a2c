#!/usr/bin/env python3
"""
librashader probe

Loads librashader the way an application would and reports which
capabilities were bound to the native library.

Usage:
    rashader-probe
    rashader-probe --library ./target/release/librashader.so --runtime opengl
    rashader-probe --config rashader.yml --verbose
"""

import argparse
import sys
from pathlib import Path

from .capabilities import RUNTIME_GROUPS, CapabilitySet
from .config import load_config
from .errors import ConfigError
from .loader import load_instance
from .types import CURRENT_ABI


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Report which librashader capabilities can be loaded"
    )
    parser.add_argument("--library", "-l", type=str, default=None,
                        help="Library name or path (default: platform librashader name)")
    parser.add_argument("--config", "-c", type=Path, default=None,
                        help="Loader config file (default: rashader.yml)")
    parser.add_argument("--runtime", "-r", action="append", choices=RUNTIME_GROUPS,
                        help="Runtime capability group to include (repeatable)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print load diagnostics")
    return parser


def main(argv=None) -> int:
    args = create_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        capabilities = CapabilitySet(args.runtime) if args.runtime else None
    except ConfigError as e:
        print(f"Error: {e}")
        return 2

    table = load_instance(
        args.library,
        capabilities=capabilities,
        config=config,
        verbose=args.verbose or None,
    )

    print("=" * 60)
    print(f"State:        {table.state.value}")
    print(f"Fully loaded: {table.fully_loaded}")
    print(f"ABI version:  {table.abi_version()} (expected {CURRENT_ABI})")
    print(f"API version:  {table.api_version()}")
    print(f"Groups:       {', '.join(table.capabilities.groups)}")
    print("=" * 60)

    for name, status in table.status().items():
        print(f"  {name:<45} {status}")

    return 0 if table.fully_loaded else 1


if __name__ == "__main__":
    sys.exit(main())
