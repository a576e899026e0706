from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path
from typing import List

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))
if str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CLAY_* settings from the caller's shell out of the tests."""
    monkeypatch.delenv("CLAY_DEBUG_PY_TRACE", raising=False)
    monkeypatch.delenv("CLAY_MAX_CALL_DEPTH", raising=False)


def pytest_collection_modifyitems(
    session: pytest.Session,
    config: pytest.Config,
    items: List[pytest.Item],
) -> None:
    """Refuse to run when two collected items share a node id."""
    counts = Counter(item.nodeid for item in items)
    clashes = sorted(nodeid for nodeid, n in counts.items() if n > 1)
    if clashes:
        listing = "\n".join(f"  {nodeid}" for nodeid in clashes)
        raise pytest.UsageError(f"Clashing node ids:\n{listing}")
