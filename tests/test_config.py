"""
Tests for compiler configuration.

Run with: python -m pytest tests/test_config.py -v
"""

from pathlib import Path

import pytest

from entity_compiler.config import (
    DEFAULT_INPUT_PATH,
    DEFAULT_OUTPUT_PATH,
    CompilerConfig,
)


ENV_VARS = (
    "ENTITY_COMPILER_INPUT",
    "ENTITY_COMPILER_OUTPUT",
    "ENTITY_COMPILER_INDENT",
    "ENTITY_COMPILER_SORT_KEYS",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Unset compiler variables, restoring the environment afterwards."""
    for name in ENV_VARS:
        # setenv first so teardown also removes values loaded from .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestCompilerConfig:
    def test_defaults(self):
        config = CompilerConfig()
        assert config.input_path == DEFAULT_INPUT_PATH == Path("data/entities-raw.json")
        assert config.output_path == DEFAULT_OUTPUT_PATH == Path("data/entities.json")
        assert config.indent is None
        assert config.sort_keys is False

    def test_from_dict(self):
        config = CompilerConfig.from_dict({
            "input_path": "raw.json",
            "output_path": "build/out.json",
            "indent": "4",
            "sort_keys": True,
        })
        assert config.input_path == Path("raw.json")
        assert config.output_path == Path("build/out.json")
        assert config.indent == 4
        assert config.sort_keys is True

    def test_from_env(self, clean_env, tmp_path):
        clean_env.setenv("ENTITY_COMPILER_INPUT", "raw.json")
        clean_env.setenv("ENTITY_COMPILER_INDENT", "2")
        clean_env.setenv("ENTITY_COMPILER_SORT_KEYS", "true")

        config = CompilerConfig.from_env(str(tmp_path / "missing.env"))

        assert config.input_path == Path("raw.json")
        assert config.output_path == DEFAULT_OUTPUT_PATH
        assert config.indent == 2
        assert config.sort_keys is True

    def test_from_dotenv_file(self, clean_env, tmp_path):
        dotenv_path = tmp_path / ".env"
        dotenv_path.write_text("ENTITY_COMPILER_OUTPUT=build/entities.json\n")

        config = CompilerConfig.from_env(str(dotenv_path))

        assert config.output_path == Path("build/entities.json")
        assert config.input_path == DEFAULT_INPUT_PATH

    def test_environment_beats_dotenv_file(self, clean_env, tmp_path):
        dotenv_path = tmp_path / ".env"
        dotenv_path.write_text("ENTITY_COMPILER_OUTPUT=from_file.json\n")
        clean_env.setenv("ENTITY_COMPILER_OUTPUT", "from_env.json")

        config = CompilerConfig.from_env(str(dotenv_path))

        assert config.output_path == Path("from_env.json")

    def test_invalid_indent(self, clean_env, tmp_path):
        clean_env.setenv("ENTITY_COMPILER_INDENT", "wide")
        with pytest.raises(ValueError):
            CompilerConfig.from_env(str(tmp_path / "missing.env"))
