"""Global test fixtures."""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from tests.mock_data import FakeClock, ObservationSequence  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def seq():
    return ObservationSequence()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def anemometer_html():
    return (FIXTURES_DIR / "anemometer.html").read_text(encoding="utf-8")
