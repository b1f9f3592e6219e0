"""
Entity table compiler driver.

Compilation runs in two phases over the whole table:

1. Per template: derive range and damage, convert and expand turrets,
   armaments and sensors.
2. Per template: attach armaments inherited through turret references,
   which needs every other template's phase-one result.

The run is all-or-nothing. Any error aborts it before the output artifact
is touched.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional

from .attributes import derive_damage, derive_range
from .errors import ArtifactWriteError, MalformedInputError
from .hardpoints import normalize_armaments, normalize_sensors, normalize_turrets
from .templates import EntityTemplate, RawEntityTemplate, parse_raw_table
from .turrets import resolve_turret_armaments


logger = logging.getLogger(__name__)


def load_raw_table(filepath: str | Path) -> dict[str, RawEntityTemplate]:
    """
    Load and parse the authored entity table.

    Args:
        filepath: Path to the raw entity JSON file.

    Returns:
        Authored templates keyed by entity type, in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedInputError: If the file is not a valid entity table.
    """
    with open(filepath, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedInputError(f"{filepath} is not valid UTF-8 JSON: {e}") from e

    return parse_raw_table(data)


def compile_template(raw: RawEntityTemplate) -> EntityTemplate:
    """
    Phase one for a single template: derivation and own-mount normalization.

    Inherited turret armaments are not attached yet.
    """
    return EntityTemplate(
        entity_type=raw.entity_type,
        kind=raw.kind,
        subtype=raw.subtype,
        length=raw.length,
        range=derive_range(raw),
        damage=derive_damage(raw),
        turrets=normalize_turrets(raw.turrets),
        armaments=normalize_armaments(raw.armaments),
        sensors=normalize_sensors(raw.sensors),
        extra=dict(raw.extra),
    )


def compile_table(
    raw_table: Mapping[str, RawEntityTemplate],
) -> dict[str, EntityTemplate]:
    """
    Compile a whole authored table.

    Args:
        raw_table: Authored templates keyed by entity type.

    Returns:
        Resolved templates in the same key order.

    Raises:
        CompilerError: On the first template that cannot be compiled.
    """
    normalized: dict[str, EntityTemplate] = {}
    for entity_type, raw in raw_table.items():
        logger.debug("Normalizing '%s'", entity_type)
        normalized[entity_type] = compile_template(raw)

    resolved = resolve_turret_armaments(normalized)
    logger.info("Compiled %d entity templates", len(resolved))
    return resolved


def serialize_table(table: Mapping[str, EntityTemplate]) -> dict[str, dict[str, Any]]:
    """Render a resolved table in the runtime artifact format."""
    return {entity_type: template.to_json() for entity_type, template in table.items()}


def compile_data(data: Any) -> dict[str, dict[str, Any]]:
    """
    Compile a decoded raw table straight to the artifact format.

    The input value is not modified.
    """
    return serialize_table(compile_table(parse_raw_table(data)))


def write_table(
    data: Mapping[str, Any],
    filepath: str | Path,
    indent: Optional[int] = None,
    sort_keys: bool = False,
) -> None:
    """
    Write a serialized table atomically.

    The JSON is written to a temporary file next to the target and moved
    into place, so a failed write leaves any previous artifact intact.

    Args:
        data: Serialized table (see serialize_table()).
        filepath: Output artifact path.
        indent: JSON indentation, None for the compact form.
        sort_keys: Sort object keys in the output.

    Raises:
        ArtifactWriteError: If the artifact could not be written.
    """
    path = Path(filepath)
    separators = (",", ":") if indent is None else None

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
    except OSError as e:
        raise ArtifactWriteError(f"cannot create temporary file for {path}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(
                data,
                f,
                indent=indent,
                separators=separators,
                sort_keys=sort_keys,
                allow_nan=False,
            )
        os.replace(tmp_name, path)
    except (OSError, ValueError) as e:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ArtifactWriteError(f"cannot write {path}: {e}") from e

    logger.info("Wrote %d entity templates to %s", len(data), path)


def compile_file(
    input_path: str | Path,
    output_path: str | Path,
    indent: Optional[int] = None,
    sort_keys: bool = False,
    make_dirs: bool = False,
) -> dict[str, EntityTemplate]:
    """
    Compile the raw entity file into the resolved artifact.

    Args:
        input_path: Raw entity table, never modified.
        output_path: Resolved artifact, replaced on success.
        indent: JSON indentation, None for the compact form.
        sort_keys: Sort object keys in the output.
        make_dirs: Create the output directory once the table compiles.

    Returns:
        The resolved table.

    Raises:
        CompilerError: If compilation or writing fails. Nothing is written
            unless the whole table compiles.
        FileNotFoundError: If the input file does not exist.
    """
    if Path(input_path).resolve() == Path(output_path).resolve():
        raise ArtifactWriteError(
            f"output path {output_path} would overwrite the raw input"
        )

    table = compile_table(load_raw_table(input_path))

    if make_dirs:
        try:
            Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArtifactWriteError(f"cannot create directory for {output_path}: {e}") from e

    write_table(serialize_table(table), output_path, indent=indent, sort_keys=sort_keys)
    return table
