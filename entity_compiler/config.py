"""
Compiler configuration: artifact locations and output formatting.

Defaults point at the fixed build locations. A ``.env`` file or the process
environment may override them:

    ENTITY_COMPILER_INPUT=data/entities-raw.json
    ENTITY_COMPILER_OUTPUT=data/entities.json
    ENTITY_COMPILER_INDENT=2
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv


DEFAULT_INPUT_PATH = Path("data/entities-raw.json")
DEFAULT_OUTPUT_PATH = Path("data/entities.json")


@dataclass
class CompilerConfig:
    """
    Where to read and write, and how to format the artifact.

    Attributes:
        input_path: Raw entity table.
        output_path: Resolved artifact.
        indent: JSON indentation, None for the compact form.
        sort_keys: Sort object keys in the artifact.
    """
    input_path: Path = DEFAULT_INPUT_PATH
    output_path: Path = DEFAULT_OUTPUT_PATH
    indent: Optional[int] = None
    sort_keys: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CompilerConfig':
        """Create configuration from a dictionary."""
        indent = data.get("indent")
        return cls(
            input_path=Path(data.get("input_path", DEFAULT_INPUT_PATH)),
            output_path=Path(data.get("output_path", DEFAULT_OUTPUT_PATH)),
            indent=int(indent) if indent is not None else None,
            sort_keys=bool(data.get("sort_keys", False)),
        )

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> 'CompilerConfig':
        """
        Create configuration from the environment, loading ``.env`` first.

        Variables already set in the environment take precedence over the
        ``.env`` file.
        """
        load_dotenv(dotenv_path)

        data: Dict[str, Any] = {}
        if os.getenv("ENTITY_COMPILER_INPUT"):
            data["input_path"] = os.getenv("ENTITY_COMPILER_INPUT")
        if os.getenv("ENTITY_COMPILER_OUTPUT"):
            data["output_path"] = os.getenv("ENTITY_COMPILER_OUTPUT")

        indent = os.getenv("ENTITY_COMPILER_INDENT")
        if indent:
            try:
                data["indent"] = int(indent)
            except ValueError:
                raise ValueError(
                    f"ENTITY_COMPILER_INDENT must be an integer, got {indent!r}"
                ) from None

        if os.getenv("ENTITY_COMPILER_SORT_KEYS", "").lower() in ("1", "true", "yes"):
            data["sort_keys"] = True

        return cls.from_dict(data)
