import pytest
from pathlib import Path
from typing import Any, Dict

from tests.helpers.fixtures import load_json_fixture


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fixtures_dir(project_root: Path) -> Path:
    """Return the fixtures directory path."""
    return project_root / "tests" / "fixtures"


@pytest.fixture
def index_payload(fixtures_dir: Path) -> Dict[str, Any]:
    """BOE index response for the Código Civil sample."""
    return load_json_fixture("indice_cc.json", fixtures_dir)


@pytest.fixture
def analysis_payload(fixtures_dir: Path) -> Dict[str, Any]:
    """BOE analysis response for the Código Civil sample."""
    return load_json_fixture("analisis_cc.json", fixtures_dir)
