"""Entity template compiler for the naval simulation's resolved entity table."""

from .compiler import (
    compile_data,
    compile_file,
    compile_table,
    compile_template,
    load_raw_table,
    serialize_table,
    write_table,
)

from .config import CompilerConfig

from .errors import (
    ArtifactWriteError,
    CompilerError,
    MalformedInputError,
    MissingFieldError,
    ReferenceCycleError,
    UnresolvedReferenceError,
)

from .interpolation import map_range

from .templates import (
    # Enums
    EntityKind,
    WeaponSubtype,
    # Raw records
    RawArmament,
    RawEntityTemplate,
    RawSensor,
    RawTurret,
    # Resolved records
    Armament,
    EntityTemplate,
    Sensor,
    Turret,
    parse_raw_table,
)

__all__ = [
    # Compiler driver
    "compile_data",
    "compile_file",
    "compile_table",
    "compile_template",
    "load_raw_table",
    "serialize_table",
    "write_table",
    # Configuration
    "CompilerConfig",
    # Errors
    "ArtifactWriteError",
    "CompilerError",
    "MalformedInputError",
    "MissingFieldError",
    "ReferenceCycleError",
    "UnresolvedReferenceError",
    # Interpolation
    "map_range",
    # Templates - Enums
    "EntityKind",
    "WeaponSubtype",
    # Templates - Raw records
    "RawArmament",
    "RawEntityTemplate",
    "RawSensor",
    "RawTurret",
    # Templates - Resolved records
    "Armament",
    "EntityTemplate",
    "Sensor",
    "Turret",
    "parse_raw_table",
]
