import sys
from pathlib import Path

import pytest

# Make 'src' importable so tests run without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture
def map5x5():
    from simulator.maps import small_map

    return small_map(5, 5)
