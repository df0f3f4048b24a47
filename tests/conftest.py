import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chain import Chain  # noqa: E402


def snapshot(chain: Chain) -> list[tuple[int, list[int], list[int]]]:
    return [(c.offset, list(c.forward), list(c.backward)) for c in chain]


@pytest.fixture
def take_snapshot():
    return snapshot
