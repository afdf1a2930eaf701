from __future__ import annotations

from collections.abc import Iterator

import pytest

from morepromises import reset_factory


@pytest.fixture(autouse=True)
def default_factory() -> Iterator[None]:
    """Every test starts and ends with the default Deferred factory."""
    reset_factory()
    yield
    reset_factory()
