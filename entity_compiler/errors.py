"""
Error types raised by the entity template compiler.

Every error is fatal for the whole run. Messages name the offending entity
type and field so authors can find the broken template quickly.
"""

from __future__ import annotations

from typing import Optional


class CompilerError(Exception):
    """
    Base class for all compilation failures.

    Attributes:
        entity_type: Key of the template that failed, if known.
        field: Name of the offending field, if known.
    """

    def __init__(
        self,
        message: str,
        entity_type: Optional[str] = None,
        field: Optional[str] = None,
    ):
        self.entity_type = entity_type
        self.field = field
        self.detail = message
        super().__init__(self._format())

    def _format(self) -> str:
        location = ""
        if self.entity_type is not None:
            location = f"'{self.entity_type}'"
            if self.field is not None:
                location += f".{self.field}"
            location += ": "
        return f"{location}{self.detail}"


class MalformedInputError(CompilerError):
    """Input is not parseable as a table of entity templates."""


class MissingFieldError(CompilerError):
    """A derivation rule needs a field the template does not define."""


class UnresolvedReferenceError(CompilerError):
    """A turret references an entity type absent from the table."""


class ReferenceCycleError(CompilerError):
    """Turret references form a cycle between templates."""

    def __init__(self, cycle: list[str]):
        self.cycle = list(cycle)
        super().__init__(
            "turret reference cycle: " + " -> ".join(self.cycle),
            entity_type=self.cycle[0] if self.cycle else None,
            field="turrets",
        )


class ArtifactWriteError(CompilerError):
    """The resolved table could not be persisted."""
