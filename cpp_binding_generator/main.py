#!/usr/bin/env python3
"""
CLI entry point for C++ declarations generator
Generates a native API header from type metadata documents
"""

import argparse
import re
import sys

import clang.cindex

from cpp_binding_generator.config import parse_config_file
from cpp_binding_generator.errors import GenerationError
from cpp_binding_generator.generator import CppBindingsGenerator
from cpp_binding_generator.metadata_loader import load_metadata


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate C++ declarations for a native API from type metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --config bindings.xml --output win32.h
  %(prog)s -C config.xml -o generated/win32.h --verify
        """
    )

    parser.add_argument(
        "-C", "--config",
        metavar="CONFIG_FILE",
        required=True,
        help="XML configuration file specifying the metadata to generate from"
    )

    parser.add_argument(
        "-o", "--output",
        metavar="FILE",
        help="Output header file (prints to stdout if not specified)"
    )

    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check the generated header with libclang before writing it"
    )

    parser.add_argument(
        "--clang-path",
        metavar="PATH",
        help="Path to libclang library (if not in default location)"
    )

    parser.add_argument(
        "--ignore-missing",
        action="store_true",
        help="Continue processing even if some metadata files are not found (default: fail on missing files)"
    )

    args = parser.parse_args(argv)

    try:
        config = parse_config_file(args.config)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error reading config file: {e}", file=sys.stderr)
        sys.exit(1)

    if not config.metadata_files:
        print("Error: No metadata files found in config file", file=sys.stderr)
        sys.exit(1)

    # Set clang library path if provided
    if args.clang_path:
        clang.cindex.Config.set_library_path(args.clang_path)

    try:
        types = load_metadata(config.metadata_files, ignore_missing=args.ignore_missing)

        generator = CppBindingsGenerator()
        for pattern, is_regex in config.removals:
            generator.type_mapper.add_removal(pattern, is_regex)
        for pattern, is_regex in config.flag_enums:
            generator.type_mapper.add_flag_enum(pattern, is_regex)

        generator.generate(types, output=args.output, verify=args.verify or config.verify)
    except (GenerationError, ValueError, FileNotFoundError, RuntimeError, re.error) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
