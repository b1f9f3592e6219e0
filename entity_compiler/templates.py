"""
Entity template data model for the entity compiler.

Two families of records live here:

- Raw records (RawEntityTemplate, RawTurret, RawArmament, RawSensor) mirror
  the hand-authored table: angles in degrees, symmetry shorthand, optional
  numeric attributes that may still need deriving.
- Resolved records (EntityTemplate, Turret, Armament, Sensor) are what the
  simulation server and clients load: angles in radians, every mount
  expanded, inherited armaments tagged with their owning turret index.

Fields the compiler does not interpret are kept in ``extra`` and written
back out unchanged. JSON key names follow the runtime artifact format
(``type`` for the entity kind, ``angle``, ``positionSide`` and so on).
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .errors import MalformedInputError


class EntityKind(str, Enum):
    """Top-level entity categories (JSON ``type``)."""
    AIRCRAFT = "aircraft"
    BOAT = "boat"
    COLLECTIBLE = "collectible"
    DECOY = "decoy"
    OBSTACLE = "obstacle"
    WEAPON = "weapon"


class WeaponSubtype(str, Enum):
    """Weapon subtypes known to the simulation."""
    TORPEDO = "torpedo"
    ROCKET = "rocket"
    ROCKET_TORPEDO = "rocketTorpedo"
    MISSILE = "missile"
    SAM = "sam"
    SHELL = "shell"
    DEPTH_CHARGE = "depthCharge"
    MINE = "mine"


# Keys interpreted by the compiler; everything else passes through
TEMPLATE_KEYS = ("type", "subtype", "length", "range", "damage", "turrets", "armaments", "sensors")
TURRET_KEYS = ("angle", "positionSide", "symmetrical", "type")
ARMAMENT_KEYS = ("angle", "positionSide", "symmetrical", "turret")
SENSOR_KEYS = ("range",)


# =============================================================================
# FIELD PARSING
# =============================================================================

def _is_number(value: Any) -> bool:
    # json.load accepts NaN and Infinity literals
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _optional_number(
    data: dict, key: str, entity_type: str, field_name: str
) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    if not _is_number(value):
        raise MalformedInputError(
            f"expected a finite number, got {value!r}",
            entity_type=entity_type,
            field=field_name,
        )
    return float(value)


def _optional_string(
    data: dict, key: str, entity_type: str, field_name: str
) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedInputError(
            f"expected a string, got {type(value).__name__}",
            entity_type=entity_type,
            field=field_name,
        )
    return value


def _optional_bool(data: dict, key: str, entity_type: str, field_name: str) -> bool:
    value = data.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise MalformedInputError(
            f"expected true or false, got {type(value).__name__}",
            entity_type=entity_type,
            field=field_name,
        )
    return value


def _mount_list(data: dict, key: str, entity_type: str) -> list[dict]:
    mounts = data.get(key)
    if mounts is None:
        return []
    if not isinstance(mounts, list):
        raise MalformedInputError(
            f"expected a list, got {type(mounts).__name__}",
            entity_type=entity_type,
            field=key,
        )
    for i, mount in enumerate(mounts):
        if not isinstance(mount, dict):
            raise MalformedInputError(
                f"expected an object, got {type(mount).__name__}",
                entity_type=entity_type,
                field=f"{key}[{i}]",
            )
    return mounts


def _extra(data: dict, known: tuple[str, ...]) -> dict[str, Any]:
    return {k: copy.deepcopy(v) for k, v in data.items() if k not in known}


# =============================================================================
# RAW (AUTHORED) RECORDS
# =============================================================================

@dataclass
class RawTurret:
    """
    Authored turret mount.

    Attributes:
        angle_degrees: Mount angle in degrees (0 when not authored).
        position_side: Lateral side, +1/-1 or 0 for centerline.
        symmetrical: Expand into a mirrored pair.
        referenced_type: Entity type whose armaments this turret carries.
        extra: Pass-through fields.
    """
    angle_degrees: float = 0.0
    position_side: float = 0.0
    symmetrical: bool = False
    referenced_type: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict, entity_type: str, index: int) -> RawTurret:
        where = f"turrets[{index}]"
        angle = _optional_number(data, "angle", entity_type, f"{where}.angle")
        side = _optional_number(data, "positionSide", entity_type, f"{where}.positionSide")
        return cls(
            angle_degrees=angle if angle is not None else 0.0,
            position_side=side if side is not None else 0.0,
            symmetrical=_optional_bool(data, "symmetrical", entity_type, f"{where}.symmetrical"),
            referenced_type=_optional_string(data, "type", entity_type, f"{where}.type"),
            extra=_extra(data, TURRET_KEYS),
        )


@dataclass
class RawArmament:
    """
    Authored entity-level armament (not attached to a turret).

    Attributes:
        angle_degrees: Mount angle in degrees (0 when not authored).
        position_side: Lateral side, +1/-1 or 0 for centerline.
        symmetrical: Expand into a mirrored pair.
        extra: Pass-through fields (weapon ``type``, offsets, ...).
    """
    angle_degrees: float = 0.0
    position_side: float = 0.0
    symmetrical: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict, entity_type: str, index: int) -> RawArmament:
        where = f"armaments[{index}]"
        if data.get("turret") is not None:
            raise MalformedInputError(
                "authored armaments cannot declare a turret index; "
                "reference the armament's entity type from a turret instead",
                entity_type=entity_type,
                field=f"{where}.turret",
            )
        angle = _optional_number(data, "angle", entity_type, f"{where}.angle")
        side = _optional_number(data, "positionSide", entity_type, f"{where}.positionSide")
        return cls(
            angle_degrees=angle if angle is not None else 0.0,
            position_side=side if side is not None else 0.0,
            symmetrical=_optional_bool(data, "symmetrical", entity_type, f"{where}.symmetrical"),
            extra=_extra(data, ARMAMENT_KEYS),
        )


@dataclass
class RawSensor:
    """Authored sensor; only ``range`` is interpreted."""
    range: Optional[float] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict, entity_type: str, index: int) -> RawSensor:
        return cls(
            range=_optional_number(data, "range", entity_type, f"sensors[{index}].range"),
            extra=_extra(data, SENSOR_KEYS),
        )


@dataclass
class RawEntityTemplate:
    """
    Hand-authored entity template, before derivation and expansion.

    Attributes:
        entity_type: Table key identifying the template.
        kind: Entity category (JSON ``type``), see EntityKind.
        subtype: Subtype, see WeaponSubtype for weapons.
        length: Physical length, input to the derivation curves.
        range: Authored range, if any.
        damage: Authored damage, if any.
        turrets: Authored turret mounts.
        armaments: Authored entity-level armaments.
        sensors: Authored sensors.
        extra: Pass-through fields.
    """
    entity_type: str
    kind: Optional[str] = None
    subtype: Optional[str] = None
    length: Optional[float] = None
    range: Optional[float] = None
    damage: Optional[float] = None
    turrets: list[RawTurret] = field(default_factory=list)
    armaments: list[RawArmament] = field(default_factory=list)
    sensors: list[RawSensor] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_weapon(self) -> bool:
        return self.kind == EntityKind.WEAPON

    @classmethod
    def from_json(cls, entity_type: str, data: Any) -> RawEntityTemplate:
        """
        Parse one authored template.

        Args:
            entity_type: Table key of the template.
            data: Decoded JSON value for the template.

        Returns:
            The parsed template. The input dictionary is not modified.

        Raises:
            MalformedInputError: If the value does not have the template shape.
        """
        if not isinstance(data, dict):
            raise MalformedInputError(
                f"template must be an object, got {type(data).__name__}",
                entity_type=entity_type,
            )

        return cls(
            entity_type=entity_type,
            kind=_optional_string(data, "type", entity_type, "type"),
            subtype=_optional_string(data, "subtype", entity_type, "subtype"),
            length=_optional_number(data, "length", entity_type, "length"),
            range=_optional_number(data, "range", entity_type, "range"),
            damage=_optional_number(data, "damage", entity_type, "damage"),
            turrets=[
                RawTurret.from_json(t, entity_type, i)
                for i, t in enumerate(_mount_list(data, "turrets", entity_type))
            ],
            armaments=[
                RawArmament.from_json(a, entity_type, i)
                for i, a in enumerate(_mount_list(data, "armaments", entity_type))
            ],
            sensors=[
                RawSensor.from_json(s, entity_type, i)
                for i, s in enumerate(_mount_list(data, "sensors", entity_type))
            ],
            extra=_extra(data, TEMPLATE_KEYS),
        )


def parse_raw_table(data: Any) -> dict[str, RawEntityTemplate]:
    """
    Parse a decoded raw table into authored templates, preserving key order.

    Raises:
        MalformedInputError: If the table or any template is malformed.
    """
    if not isinstance(data, dict):
        raise MalformedInputError(
            f"entity table must be an object keyed by entity type, got {type(data).__name__}"
        )
    return {
        entity_type: RawEntityTemplate.from_json(entity_type, template)
        for entity_type, template in data.items()
    }


# =============================================================================
# RESOLVED RECORDS
# =============================================================================

@dataclass
class Turret:
    """Resolved turret mount. Its mount index is its list position."""
    angle_radians: float
    position_side: float
    referenced_type: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        data = dict(self.extra)
        data["angle"] = self.angle_radians
        data["positionSide"] = self.position_side
        if self.referenced_type is not None:
            data["type"] = self.referenced_type
        return data


@dataclass
class Armament:
    """
    Resolved armament.

    Attributes:
        angle_radians: Mount angle in radians.
        position_side: Lateral side.
        turret_index: Owning turret's index in the expanded turret list,
            None for entity-level armaments.
        extra: Pass-through fields.
    """
    angle_radians: float
    position_side: float
    turret_index: Optional[int] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        data = dict(self.extra)
        data["angle"] = self.angle_radians
        data["positionSide"] = self.position_side
        if self.turret_index is not None:
            data["turret"] = self.turret_index
        return data


@dataclass
class Sensor:
    """Resolved sensor with its range clamped."""
    range: Optional[float] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        data = dict(self.extra)
        if self.range is not None:
            data["range"] = self.range
        return data


@dataclass
class EntityTemplate:
    """Fully resolved entity template as consumed at runtime."""
    entity_type: str
    kind: Optional[str] = None
    subtype: Optional[str] = None
    length: Optional[float] = None
    range: Optional[float] = None
    damage: Optional[float] = None
    turrets: list[Turret] = field(default_factory=list)
    armaments: list[Armament] = field(default_factory=list)
    sensors: list[Sensor] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_weapon(self) -> bool:
        return self.kind == EntityKind.WEAPON

    def to_json(self) -> dict[str, Any]:
        """Render the template in the runtime artifact format."""
        data = dict(self.extra)
        for key, value in (
            ("type", self.kind),
            ("subtype", self.subtype),
            ("length", self.length),
            ("range", self.range),
            ("damage", self.damage),
        ):
            if value is not None:
                data[key] = value
        data["turrets"] = [t.to_json() for t in self.turrets]
        data["armaments"] = [a.to_json() for a in self.armaments]
        data["sensors"] = [s.to_json() for s in self.sensors]
        return data
