#!/usr/bin/env python3
"""
Tabulate the weapon range and damage curves used by the entity compiler.

Samples each subtype's curve across its length domain so balance changes
can be reviewed side by side.

Usage:
    python scripts/curve_report.py
    python scripts/curve_report.py --samples 12 --output docs/curves.md
"""

import argparse
import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from entity_compiler.attributes import derive_damage, range_ceiling
from entity_compiler.templates import EntityKind, RawEntityTemplate, WeaponSubtype


# Subtype -> (min length, max length) sampled for the report
LENGTH_DOMAINS = {
    WeaponSubtype.SHELL: (0.1, 2.5),
    WeaponSubtype.ROCKET: (0.5, 11.0),
    WeaponSubtype.MISSILE: (0.5, 11.0),
    WeaponSubtype.TORPEDO: (2.0, 8.0),
    WeaponSubtype.DEPTH_CHARGE: (0.5, 1.5),
}


def sample_curves(subtype: WeaponSubtype, samples: int) -> list[dict]:
    """Evaluate the range ceiling and damage curves for one subtype."""
    low, high = LENGTH_DOMAINS[subtype]
    rows = []
    for length in np.linspace(low, high, samples):
        template = RawEntityTemplate(
            entity_type=f"sample_{subtype.value}",
            kind=EntityKind.WEAPON.value,
            subtype=subtype.value,
            length=float(length),
        )
        rows.append({
            "length": round(float(length), 3),
            "range_ceiling": round(range_ceiling(template), 1),
            "damage": round(derive_damage(template), 3),
        })
    return rows


def generate_markdown(samples: int) -> str:
    """Generate markdown content with one table per subtype."""
    lines = []
    lines.append("# Weapon Derivation Curves")
    lines.append("")
    lines.append("Range ceilings and derived damage by weapon length.")
    lines.append("")

    for subtype in LENGTH_DOMAINS:
        rows = sample_curves(subtype, samples)
        lines.append(f"## {subtype.value}")
        lines.append("")
        lines.append("| Length | Range Ceiling | Damage |")
        lines.append("|--------|---------------|--------|")
        for row in rows:
            lines.append(f"| {row['length']} | {row['range_ceiling']} | {row['damage']} |")
        lines.append("")

    return "\n".join(lines)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Tabulate weapon derivation curves")
    parser.add_argument(
        "--samples",
        type=int,
        default=8,
        help="Samples per subtype (default: 8)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write markdown here instead of stdout",
    )
    args = parser.parse_args(argv)

    if args.samples < 2:
        parser.error("--samples must be at least 2")

    markdown_content = generate_markdown(args.samples)
    if args.output is None:
        print(markdown_content)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(markdown_content)
        print(f"Saved markdown to: {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
