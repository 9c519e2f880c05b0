"""Tests to ensure .env.example stays in sync with Settings schema.

This test validates that:
1. All Settings fields have a corresponding entry in .env.example
2. All variables in .env.example correspond to a Settings field
3. Every variable in .env.example carries a documentation comment
4. .env (if it exists) has no variables unknown to .env.example
5. Application code reads configuration only through get_settings()
"""

import re
from pathlib import Path

import pytest
from pydantic import BaseModel

from richcopy.config import Settings

# Root of the project
PROJECT_ROOT = Path(__file__).parent.parent.parent

_SRC_DIR = PROJECT_ROOT / "src" / "richcopy"


def _derive_env_var_names(settings_cls: type[Settings]) -> set[str]:
    """Derive expected env var names from Settings schema.

    For each sub-model field (e.g. ``markdown: MarkdownConfig``), iterates
    the sub-model's fields and produces ``MARKDOWN__PRESET`` etc.
    Direct fields on Settings are uppercased without a prefix.
    """
    names: set[str] = set()
    delimiter = settings_cls.model_config.get("env_nested_delimiter", "__")

    for field_name, field_info in settings_cls.model_fields.items():
        annotation = field_info.annotation
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            prefix = field_name.upper()
            for sub_field_name in annotation.model_fields:
                names.add(f"{prefix}{delimiter}{sub_field_name.upper()}")
        else:
            names.add(field_name.upper())

    return names


def _extract_env_vars_from_file(filepath: Path) -> set[str]:
    """Extract all uncommented environment variable names from an env file."""
    env_vars: set[str] = set()
    if not filepath.exists():
        return env_vars

    for line in filepath.read_text().splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if "=" in stripped:
            var_name = stripped.split("=", 1)[0].strip()
            if var_name:
                env_vars.add(var_name)

    return env_vars


class TestSettingsEnvVarsSync:
    """Ensure .env.example stays in sync with Settings schema."""

    def test_env_example_exists(self) -> None:
        assert (PROJECT_ROOT / ".env.example").exists(), ".env.example must exist"

    def test_all_settings_fields_in_env_example(self) -> None:
        schema_vars = _derive_env_var_names(Settings)
        example_vars = _extract_env_vars_from_file(PROJECT_ROOT / ".env.example")

        missing = schema_vars - example_vars
        assert not missing, (
            f"Settings fields not documented in .env.example:\n{sorted(missing)}"
        )

    def test_all_env_example_vars_in_settings(self) -> None:
        schema_vars = _derive_env_var_names(Settings)
        example_vars = _extract_env_vars_from_file(PROJECT_ROOT / ".env.example")

        extra = example_vars - schema_vars
        assert not extra, (
            f"Variables in .env.example but not in Settings schema:\n{sorted(extra)}"
        )

    def test_env_example_has_comments(self) -> None:
        """Each env var in .env.example should have a preceding comment."""
        lines = (PROJECT_ROOT / ".env.example").read_text().splitlines()

        vars_without_docs: list[str] = []
        prev_was_comment = False

        for line in lines:
            stripped = line.strip()

            if stripped.startswith("#"):
                prev_was_comment = True
            elif not stripped:
                pass  # blank lines don't reset comment status
            elif "=" in stripped:
                if not prev_was_comment:
                    vars_without_docs.append(stripped.split("=", 1)[0].strip())
                prev_was_comment = False

        assert not vars_without_docs, (
            f"Environment variables without documentation comments:\n"
            f"{vars_without_docs}"
        )


class TestEnvFileSync:
    def test_env_has_no_extra_vars(self) -> None:
        """.env must not have variables not in .env.example."""
        env_file = PROJECT_ROOT / ".env"
        if not env_file.exists():
            pytest.skip(".env file does not exist")

        example_vars = _extract_env_vars_from_file(PROJECT_ROOT / ".env.example")
        extra = _extract_env_vars_from_file(env_file) - example_vars
        assert not extra, f"Variables in .env but not in .env.example:\n{sorted(extra)}"


class TestNoDirectEnvAccess:
    """All configuration must flow through get_settings()."""

    def test_no_os_environ_in_app_code(self) -> None:
        config_read_patterns = re.compile(
            r"os\.environ\.get\(|os\.getenv\(|os\.environ\[|load_dotenv"
        )
        violations: list[str] = []

        for py_file in _SRC_DIR.rglob("*.py"):
            content = py_file.read_text()
            for i, line in enumerate(content.splitlines(), 1):
                if line.strip().startswith("#"):
                    continue
                if config_read_patterns.search(line):
                    violations.append(f"{py_file.relative_to(PROJECT_ROOT)}:{i}")

        assert not violations, (
            "Direct environment access found in application code. "
            "Use get_settings() instead.\n" + "\n".join(violations)
        )
