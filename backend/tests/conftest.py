from pathlib import Path
from dotenv import load_dotenv
import pytest

# Load environment variables for tests before anything imports the settings
load_dotenv(Path(__file__).resolve().parents[1] / '.env.test', override=True)

from optica.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def reset_dependency_overrides():
    """Each test wires its own database; never leak overrides between tests."""
    yield
    app.dependency_overrides.clear()
