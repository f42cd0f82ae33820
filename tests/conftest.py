from __future__ import annotations

import pytest

from _fakes import DeferredTransport, FakeNode


@pytest.fixture
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture
def deferred() -> DeferredTransport:
    return DeferredTransport()
