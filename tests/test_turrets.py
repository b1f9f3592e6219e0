"""
Tests for turret armament inheritance.

Run with: python -m pytest tests/test_turrets.py -v
"""

import math

import pytest

from entity_compiler.compiler import compile_table
from entity_compiler.errors import ReferenceCycleError, UnresolvedReferenceError
from entity_compiler.templates import Armament, EntityTemplate, Turret, parse_raw_table
from entity_compiler.turrets import (
    ArmamentResolver,
    inherit_armament,
    resolve_turret_armaments,
)


def compile_raw(data: dict) -> dict:
    return compile_table(parse_raw_table(data))


@pytest.fixture
def gun_turret() -> dict:
    """Turret template carrying a mirrored pair of guns."""
    return {
        "type": "turret",
        "armaments": [
            {"type": "mk7", "angle": 0, "positionSide": 0.6, "symmetrical": True},
        ],
    }


class TestInheritArmament:
    def test_copy_tagged_with_turret_index(self):
        source = Armament(angle_radians=0.3, position_side=-1.0, extra={"type": "mk7"})
        inherited = inherit_armament(source, 4)
        assert inherited.turret_index == 4
        assert inherited.angle_radians == 0.3
        assert inherited.position_side == -1.0
        assert inherited.extra == {"type": "mk7"}
        assert inherited.extra is not source.extra
        assert source.turret_index is None


class TestTurretInheritance:
    """Armaments inherited through turret references."""

    def test_inherited_after_own_armaments(self, gun_turret):
        table = compile_raw({
            "mk7Turret": gun_turret,
            "iowa": {
                "type": "boat",
                "turrets": [{"type": "mk7Turret", "angle": 0}],
                "armaments": [{"type": "harpoon", "angle": 30}],
            },
        })
        armaments = table["iowa"].armaments

        assert [a.extra["type"] for a in armaments] == ["harpoon", "mk7", "mk7"]
        assert [a.turret_index for a in armaments] == [None, 0, 0]

    def test_inherited_angles_taken_as_is(self, gun_turret):
        gun_turret["armaments"][0]["angle"] = 90
        table = compile_raw({
            "mk7Turret": gun_turret,
            "iowa": {"turrets": [{"type": "mk7Turret", "angle": 180}]},
        })
        first, second = table["iowa"].armaments

        # Converted once by the referenced template, not again
        assert first.angle_radians == pytest.approx(math.pi / 2)
        assert second.angle_radians == pytest.approx(-math.pi / 2)
        assert first.position_side == 0.6
        assert second.position_side == -0.6

    def test_turret_index_counts_expanded_turrets(self, gun_turret):
        """A symmetrical turret before the reference shifts its index by one."""
        table = compile_raw({
            "mk7Turret": gun_turret,
            "iowa": {
                "turrets": [
                    {"angle": 30, "positionSide": 1, "symmetrical": True},
                    {"type": "mk7Turret", "angle": 0},
                ],
            },
        })
        iowa = table["iowa"]

        assert len(iowa.turrets) == 3
        assert iowa.turrets[2].referenced_type == "mk7Turret"
        assert [a.turret_index for a in iowa.armaments] == [2, 2]

    def test_symmetrical_referencing_turret_inherits_twice(self, gun_turret):
        table = compile_raw({
            "mk7Turret": gun_turret,
            "fletcher": {
                "turrets": [{"type": "mk7Turret", "angle": 45, "positionSide": 3, "symmetrical": True}],
            },
        })
        fletcher = table["fletcher"]

        assert [t.referenced_type for t in fletcher.turrets] == ["mk7Turret", "mk7Turret"]
        assert [a.turret_index for a in fletcher.armaments] == [0, 0, 1, 1]

    def test_referenced_template_unchanged(self, gun_turret):
        table = compile_raw({
            "iowa": {"turrets": [{"type": "mk7Turret"}, {"type": "mk7Turret"}]},
            "mk7Turret": gun_turret,
        })
        assert [a.turret_index for a in table["iowa"].armaments] == [0, 0, 1, 1]
        assert [a.turret_index for a in table["mk7Turret"].armaments] == [None, None]

    def test_nested_references_use_full_armament_list(self, gun_turret):
        """A referenced template's own inherited armaments come along, retagged."""
        table = compile_raw({
            "mk7Turret": gun_turret,
            "superTurret": {
                "armaments": [{"type": "mk2", "angle": 0}],
                "turrets": [{"type": "mk7Turret"}],
            },
            "montana": {
                "turrets": [{"angle": 0}, {"type": "superTurret"}],
            },
        })
        super_turret = table["superTurret"]
        montana = table["montana"]

        assert [a.turret_index for a in super_turret.armaments] == [None, 0, 0]
        assert [a.extra["type"] for a in montana.armaments] == ["mk2", "mk7", "mk7"]
        assert [a.turret_index for a in montana.armaments] == [1, 1, 1]

    def test_turret_without_reference_inherits_nothing(self):
        table = compile_raw({"fletcher": {"turrets": [{"angle": 10}]}})
        assert table["fletcher"].armaments == []


class TestReferenceErrors:
    def test_unknown_reference(self):
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            compile_raw({"iowa": {"turrets": [{"angle": 0}, {"type": "missingTurret"}]}})
        error = exc_info.value
        assert error.entity_type == "iowa"
        assert error.field == "turrets[1].type"
        assert "missingTurret" in str(error)

    def test_two_template_cycle(self):
        with pytest.raises(ReferenceCycleError) as exc_info:
            compile_raw({
                "A": {"turrets": [{"type": "B"}]},
                "B": {"turrets": [{"type": "A"}]},
            })
        assert exc_info.value.cycle == ["A", "B", "A"]
        assert "A -> B -> A" in str(exc_info.value)

    def test_self_reference(self):
        with pytest.raises(ReferenceCycleError) as exc_info:
            compile_raw({"A": {"turrets": [{"type": "A"}]}})
        assert exc_info.value.cycle == ["A", "A"]

    def test_cycle_reached_through_chain(self):
        with pytest.raises(ReferenceCycleError) as exc_info:
            compile_raw({
                "ship": {"turrets": [{"type": "X"}]},
                "X": {"turrets": [{"type": "Y"}]},
                "Y": {"turrets": [{"type": "X"}]},
            })
        assert exc_info.value.cycle == ["X", "Y", "X"]


class TestArmamentResolver:
    def test_results_are_memoized(self):
        table = {
            "gun": EntityTemplate(
                entity_type="gun",
                armaments=[Armament(angle_radians=0.0, position_side=0.0)],
            ),
            "ship": EntityTemplate(
                entity_type="ship",
                turrets=[Turret(0.0, 0.0, "gun"), Turret(0.0, 0.0, "gun")],
            ),
        }
        resolver = ArmamentResolver(table)
        assert resolver.resolve("gun") is resolver.resolve("gun")
        assert len(resolver.resolve("ship")) == 2

    def test_input_templates_not_modified(self):
        own = [Armament(angle_radians=0.0, position_side=0.0)]
        table = {
            "gun": EntityTemplate(entity_type="gun", armaments=[Armament(0.1, 1.0)]),
            "ship": EntityTemplate(
                entity_type="ship",
                turrets=[Turret(0.0, 0.0, "gun")],
                armaments=own,
            ),
        }
        resolved = resolve_turret_armaments(table)
        assert len(resolved["ship"].armaments) == 2
        assert table["ship"].armaments is own
        assert len(own) == 1
