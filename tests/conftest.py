from __future__ import annotations

from pathlib import Path

import pytest

from phpgen.config import PhpGenConfig
from tests._fixtures.workspace import Workspace


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    """Provide a reusable PHP project rooted at the pytest tmp_path."""
    return Workspace(tmp_path)


@pytest.fixture
def laravel_config(workspace: Workspace) -> PhpGenConfig:
    """Configuration mapping App and Tests the way a Laravel project does."""
    workspace.write(
        {
            ".phpgen.yml": """
            psr4:
              'App\\': app
            priority_psr4:
              'Tests\\': tests
            """
        }
    )
    return workspace.config()
