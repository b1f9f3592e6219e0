"""
Turret armament inheritance.

A turret may name another entity template (its ``type``); the turret then
carries that template's armaments. Inherited armaments are copied into the
owning template after its own armaments, tagged with the index of the turret
that carries them in the expanded turret list.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import replace
from typing import Mapping

from .errors import ReferenceCycleError, UnresolvedReferenceError
from .templates import Armament, EntityTemplate


logger = logging.getLogger(__name__)


def inherit_armament(armament: Armament, turret_index: int) -> Armament:
    """Copy of a referenced template's armament owned by turret ``turret_index``."""
    return Armament(
        angle_radians=armament.angle_radians,
        position_side=armament.position_side,
        turret_index=turret_index,
        extra=copy.deepcopy(armament.extra),
    )


class ArmamentResolver:
    """
    Resolves full armament lists across a table of normalized templates.

    The table must already hold every template's own normalized armaments
    and expanded turrets. Results are memoized, so each template is walked
    once regardless of how many turrets reference it.
    """

    def __init__(self, table: Mapping[str, EntityTemplate]):
        self._table = table
        self._resolved: dict[str, list[Armament]] = {}
        self._visiting: list[str] = []

    def resolve(self, entity_type: str) -> list[Armament]:
        """
        Full armament list of a template: own armaments, then inherited ones
        in turret order.

        Raises:
            UnresolvedReferenceError: If a turret names an unknown entity type.
            ReferenceCycleError: If turret references loop back on themselves.
        """
        if entity_type in self._resolved:
            return self._resolved[entity_type]

        if entity_type in self._visiting:
            start = self._visiting.index(entity_type)
            raise ReferenceCycleError(self._visiting[start:] + [entity_type])

        template = self._table[entity_type]
        self._visiting.append(entity_type)
        try:
            armaments = list(template.armaments)
            for index, turret in enumerate(template.turrets):
                referenced = turret.referenced_type
                if referenced is None:
                    continue
                if referenced not in self._table:
                    raise UnresolvedReferenceError(
                        f"turret references unknown entity type '{referenced}'",
                        entity_type=entity_type,
                        field=f"turrets[{index}].type",
                    )
                armaments.extend(
                    inherit_armament(armament, index)
                    for armament in self.resolve(referenced)
                )
        finally:
            self._visiting.pop()

        logger.debug(
            "Resolved %d armaments for '%s' (%d inherited)",
            len(armaments),
            entity_type,
            len(armaments) - len(template.armaments),
        )
        self._resolved[entity_type] = armaments
        return armaments


def resolve_turret_armaments(
    table: Mapping[str, EntityTemplate],
) -> dict[str, EntityTemplate]:
    """
    Attach inherited turret armaments to every template in a table.

    Args:
        table: Templates with normalized own mounts, keyed by entity type.

    Returns:
        New templates, in the same key order, with complete armament lists.
        The input templates are left unchanged.
    """
    resolver = ArmamentResolver(table)
    return {
        entity_type: replace(template, armaments=resolver.resolve(entity_type))
        for entity_type, template in table.items()
    }
