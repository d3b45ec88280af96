from pathlib import Path

import pytest

from bcfg.generators import get_generator
from bcfg.types import Language

from tests.infrastructure.cli_utils import run_cli  # noqa: F401
from tests.infrastructure.file_utils import write_request


@pytest.fixture
def kotlin():
    """Kotlin generator instance."""
    return get_generator(Language.KOTLIN)


@pytest.fixture
def java():
    """Java generator instance."""
    return get_generator(Language.JAVA)


@pytest.fixture
def request_file(tmp_path: Path):
    """Minimal request file with a couple of constants."""
    return write_request(tmp_path, """
        package: com.example.app
        class_name: BuildConfig
        language: kotlin
        output_dir: generated
        documentation: Build constants
        fields:
          - {name: APP_NAME, type: String, value: demo}
          - {name: VERSION_CODE, type: int, value: 42}
          - {name: BUILD_TIME, type: long, value: !long 1700000000000}
          - {name: FEATURES, type: "List<String>", value: [login, search]}
    """)


@pytest.fixture(autouse=True)
def _no_debug_env(monkeypatch):
    monkeypatch.delenv("BCFG_DEBUG", raising=False)
