#!/usr/bin/env python3
"""
Compile the raw entity table into the resolved artifact.

Usage:
    python scripts/compile_entities.py
    python scripts/compile_entities.py --input data/entities-raw.json --output data/entities.json
    python scripts/compile_entities.py --indent 2 --verbose
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from entity_compiler.compiler import compile_file
from entity_compiler.config import CompilerConfig
from entity_compiler.errors import CompilerError


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Compile the raw entity table into the resolved artifact",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment (also read from .env):
    ENTITY_COMPILER_INPUT    raw entity table path
    ENTITY_COMPILER_OUTPUT   resolved artifact path
    ENTITY_COMPILER_INDENT   JSON indentation (compact when unset)
        """,
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Raw entity table (default: data/entities-raw.json)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Resolved artifact (default: data/entities.json)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print the artifact with this indentation",
    )
    parser.add_argument(
        "--sort-keys",
        action="store_true",
        help="Sort object keys in the artifact",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log per-template progress",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = CompilerConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.input is not None:
        config.input_path = args.input
    if args.output is not None:
        config.output_path = args.output
    if args.indent is not None:
        config.indent = args.indent
    if args.sort_keys:
        config.sort_keys = True

    print(f"Compiling entity templates from {config.input_path}...")

    try:
        table = compile_file(
            config.input_path,
            config.output_path,
            indent=config.indent,
            sort_keys=config.sort_keys,
            make_dirs=True,
        )
    except FileNotFoundError as e:
        print(f"Error: input not found: {e.filename}", file=sys.stderr)
        return 1
    except CompilerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    weapons = sum(1 for t in table.values() if t.is_weapon)
    print(f"  Compiled {len(table)} templates ({weapons} weapons)")
    print(f"Saved resolved table to: {config.output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
