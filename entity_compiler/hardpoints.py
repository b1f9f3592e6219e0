"""
Hardpoint normalization: turrets, armaments and sensors.

Authored mounts use degrees and a ``symmetrical`` shorthand for a mirrored
pair on the opposite side of the hull. Normalized mounts use radians and
list both members of each pair explicitly: the authored mount first, then
its mirror, in authoring order.
"""

from __future__ import annotations

import copy
import math

from .templates import (
    Armament,
    RawArmament,
    RawSensor,
    RawTurret,
    Sensor,
    Turret,
)


# Sensor range ceiling in world units
SENSOR_RANGE_CEILING = 2000.0


def degrees_to_radians(angle_degrees: float) -> float:
    """Convert an authored angle to radians."""
    return angle_degrees * math.pi / 180


def _negate(value: float) -> float:
    # Centerline mounts mirror onto themselves; never emit -0.0
    return -value if value != 0 else 0.0


def normalize_turrets(turrets: list[RawTurret]) -> list[Turret]:
    """
    Convert and expand authored turrets.

    Returns:
        Expanded turret list. A turret's position in this list is the index
        inherited armaments refer to.
    """
    expanded: list[Turret] = []
    for raw in turrets:
        turret = Turret(
            angle_radians=degrees_to_radians(raw.angle_degrees),
            position_side=raw.position_side,
            referenced_type=raw.referenced_type,
            extra=copy.deepcopy(raw.extra),
        )
        expanded.append(turret)
        if raw.symmetrical:
            expanded.append(mirror_turret(turret))
    return expanded


def mirror_turret(turret: Turret) -> Turret:
    """Copy of a turret on the opposite side of the hull."""
    return Turret(
        angle_radians=_negate(turret.angle_radians),
        position_side=_negate(turret.position_side),
        referenced_type=turret.referenced_type,
        extra=copy.deepcopy(turret.extra),
    )


def normalize_armaments(armaments: list[RawArmament]) -> list[Armament]:
    """Convert and expand authored entity-level armaments."""
    expanded: list[Armament] = []
    for raw in armaments:
        armament = Armament(
            angle_radians=degrees_to_radians(raw.angle_degrees),
            position_side=raw.position_side,
            extra=copy.deepcopy(raw.extra),
        )
        expanded.append(armament)
        if raw.symmetrical:
            expanded.append(mirror_armament(armament))
    return expanded


def mirror_armament(armament: Armament) -> Armament:
    """Copy of an armament on the opposite side of the hull."""
    return Armament(
        angle_radians=_negate(armament.angle_radians),
        position_side=_negate(armament.position_side),
        turret_index=armament.turret_index,
        extra=copy.deepcopy(armament.extra),
    )


def normalize_sensors(sensors: list[RawSensor]) -> list[Sensor]:
    """Copy sensors forward, capping any authored range."""
    return [
        Sensor(
            range=min(raw.range, SENSOR_RANGE_CEILING) if raw.range is not None else None,
            extra=copy.deepcopy(raw.extra),
        )
        for raw in sensors
    ]
