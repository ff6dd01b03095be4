from typing import Callable

import pytest
from cookies import build_cookie


@pytest.fixture
def make_cookie() -> Callable[..., str]:
    return build_cookie
