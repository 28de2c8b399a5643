from datetime import timedelta
from typing import Any, Dict

import pytest

from tests.feed_factory import NOW, offer


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def active_offer() -> Dict[str, Any]:
    return offer(start=NOW - timedelta(days=1), end=NOW + timedelta(days=1))
