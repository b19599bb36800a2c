#!/usr/bin/env python3
"""
Shader Preset Parameter Dump

Loads librashader at run time and lists the runtime parameters a shader
preset declares. Works whether or not librashader is installed; without it
the preset simply reports no parameters.

Usage:
    python preset_params.py --preset shaders/crt/crt-royale.slangp
    python preset_params.py -p crt.slangp --library ./librashader.so --verbose
"""

import argparse
import sys
from ctypes import byref

import rashader
from rashader.presets import create_preset, runtime_params


def main():
    parser = argparse.ArgumentParser(description="List runtime parameters of a shader preset")
    parser.add_argument("--preset", "-p", required=True, help="Path to the shader preset")
    parser.add_argument("--library", "-l", default=None, help="librashader library name or path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print load diagnostics")
    args = parser.parse_args()

    table = rashader.load_instance(args.library, verbose=args.verbose)
    if not table.fully_loaded:
        print(f"librashader not available ({table.state.value}), using no-op capabilities")

    print(f"Loading preset: {args.preset}")
    try:
        preset = create_preset(table, args.preset)
        params = runtime_params(table, preset)
    except rashader.LibrashaderError as e:
        print(f"Error loading preset: {e}")
        sys.exit(1)

    print("=" * 60)
    for param in params:
        print(f"{param.name:<24} {param.initial:>8.3f}  [{param.minimum}, {param.maximum}] "
              f"step {param.step}")
        if param.description:
            print(f"    {param.description}")
    print("=" * 60)
    print(f"{len(params)} parameter(s)")

    rashader.check_error(table, table.preset_free(byref(preset)))


if __name__ == "__main__":
    main()
