"""
Utilities for golden tests of language generators.
Provides unified work with golden reference files.
"""

import os
from pathlib import Path
from typing import Optional

import pytest

_EXTENSIONS = {
    "kotlin": ".kt",
    "java": ".java",
}


def assert_golden_match(
    result: str,
    golden_type: str,
    golden_name: str,
    language: Optional[str] = None,
    update_golden: Optional[bool] = None
) -> None:
    """
    Compare generated source with its golden file.

    Args:
        result: Actual generated source
        golden_type: Golden group ("objects", "top_level", "containers", etc.)
        golden_name: Golden file name (without extension)
        language: Generator language ("kotlin", "java").
                 If not specified, detected from the test file location
        update_golden: Flag to update golden file.
                      If None, taken from PYTEST_UPDATE_GOLDENS environment variable

    Raises:
        AssertionError: If result does not match the reference
    """
    if language is None:
        language = _detect_language_from_test_context()

    if update_golden is None:
        update_golden = os.getenv("PYTEST_UPDATE_GOLDENS") == "1"

    golden_file = get_golden_dir(language, golden_type) / f"{golden_name}{_EXTENSIONS.get(language, '.txt')}"
    normalized_result = _normalize_result(result)

    if update_golden or not golden_file.exists():
        golden_file.parent.mkdir(parents=True, exist_ok=True)
        golden_file.write_text(normalized_result, encoding="utf-8")
        if update_golden:
            pytest.skip(f"Updated golden file: {golden_file}")

    expected = golden_file.read_text(encoding="utf-8")
    if normalized_result != expected:
        raise AssertionError(_create_diff_message(expected, normalized_result, golden_file))


def _detect_language_from_test_context() -> str:
    """
    Detects generator language from the current test context.
    Looks for a tests/generators/<language>/test_*.py frame on the stack.
    """
    import inspect

    for frame_info in inspect.stack():
        frame_path = Path(frame_info.filename)
        if (frame_path.name.startswith("test_") and
            frame_path.suffix == ".py" and
            "generators" in frame_path.parts):
            parts = frame_path.parts
            idx = parts.index("generators")
            if idx + 1 < len(parts) and parts[idx + 1] in _EXTENSIONS:
                return parts[idx + 1]

    raise ValueError(
        "Cannot auto-detect language for golden test. "
        "Please specify language parameter explicitly, or ensure test is in "
        "tests/generators/<language>/ directory structure."
    )


def get_golden_dir(language: str, golden_type: Optional[str] = None) -> Path:
    """Directory with golden files of a language (and optionally of one golden group)."""
    base = Path(__file__).parent / language / "goldens"
    return base / golden_type if golden_type else base


def _normalize_result(result: str) -> str:
    # Normalize line endings
    normalized = result.replace("\r\n", "\n").replace("\r", "\n")
    # Remove trailing whitespace at end of file, but preserve structure
    return normalized.rstrip() + "\n" if normalized.strip() else ""


def _create_diff_message(expected: str, actual: str, golden_file: Path) -> str:
    import difflib

    diff_lines = list(difflib.unified_diff(
        expected.splitlines(keepends=True),
        actual.splitlines(keepends=True),
        fromfile=f"expected ({golden_file.name})",
        tofile="actual",
        lineterm=""
    ))

    if len(diff_lines) > 50:  # Limit very long diffs
        diff_lines = diff_lines[:25] + ["\n... (diff truncated, showing first 25 lines) ...\n"] + diff_lines[-25:]

    return (
        f"Golden test failed for {golden_file}\n"
        f"To update the golden file, run:\n"
        f"  PYTEST_UPDATE_GOLDENS=1 python -m pytest {golden_file.stem}\n"
        f"\nDiff:\n{''.join(diff_lines)}"
    )
