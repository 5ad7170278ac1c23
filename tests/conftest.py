from __future__ import annotations

import pytest

from fakes import FakeNode


@pytest.fixture
def node() -> FakeNode:
    return FakeNode()
