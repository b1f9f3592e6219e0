"""
Range and damage derivation for entity templates.

Weapons are authored with a physical length; their range ceiling and, when
not authored, their damage follow per-subtype curves over that length.
"""

from __future__ import annotations

import logging
from typing import Optional

from .errors import MissingFieldError
from .interpolation import map_range
from .templates import RawEntityTemplate, WeaponSubtype


logger = logging.getLogger(__name__)


# Range ceiling for everything without a subtype-specific curve
DEFAULT_RANGE_CEILING = 1500.0

# Constant damage for subtypes that do not scale with length
DEPTH_CHARGE_DAMAGE = 1.0


def _require_length(template: RawEntityTemplate, attribute: str) -> float:
    if template.length is None:
        raise MissingFieldError(
            f"length is required to derive {attribute} for "
            f"{template.subtype or 'untyped'} weapons",
            entity_type=template.entity_type,
            field="length",
        )
    return template.length


def range_ceiling(template: RawEntityTemplate) -> float:
    """
    Maximum range allowed for a template.

    Shells get a short, length-scaled ceiling. Rockets and missiles scale up
    to the default ceiling. Everything else uses the default ceiling.

    Raises:
        MissingFieldError: If the subtype's curve needs a length that is absent.
    """
    ceiling = DEFAULT_RANGE_CEILING
    if not template.is_weapon:
        return ceiling

    if template.subtype == WeaponSubtype.SHELL:
        length = _require_length(template, "range")
        ceiling = map_range(length, 0.2, 2, 250, 800, True)
    elif template.subtype in (WeaponSubtype.ROCKET, WeaponSubtype.MISSILE):
        length = _require_length(template, "range")
        # Upper bound is the default ceiling, not the shell ceiling
        ceiling = map_range(length, 1, 10, 400, ceiling, True)

    return ceiling


def derive_range(template: RawEntityTemplate) -> Optional[float]:
    """
    Resolve a template's range.

    Only an authored range is resolved; it is capped at range_ceiling().
    Templates without a range keep none.
    """
    if template.range is None:
        return None
    return min(template.range, range_ceiling(template))


def derive_damage(template: RawEntityTemplate) -> Optional[float]:
    """
    Resolve a template's damage.

    Authored damage always wins. Weapons without one get a value from their
    subtype's curve; subtypes without a curve stay unset.

    Raises:
        MissingFieldError: If the subtype's curve needs a length that is absent.
    """
    if template.damage is not None or not template.is_weapon:
        return template.damage

    subtype = template.subtype
    if subtype == WeaponSubtype.TORPEDO:
        return map_range(_require_length(template, "damage"), 3, 7, 0.6, 1.1, True)
    if subtype in (WeaponSubtype.ROCKET, WeaponSubtype.MISSILE):
        return map_range(_require_length(template, "damage"), 1, 6, 0.15, 0.9, True)
    if subtype == WeaponSubtype.SHELL:
        return map_range(_require_length(template, "damage"), 0.25, 2, 0.3, 0.8, True)
    if subtype == WeaponSubtype.DEPTH_CHARGE:
        return DEPTH_CHARGE_DAMAGE

    logger.warning(
        "Weapon '%s' (subtype %s) has no authored damage and no damage curve",
        template.entity_type,
        subtype,
    )
    return None
