"""
Shared fixtures for the calculator tests
"""
import math

import pytest

from weilao.models import demo_inputs
from weilao.engine import compute


@pytest.fixture
def demo():
    return demo_inputs()


@pytest.fixture
def demo_result(demo):
    return compute(demo)


def iter_numbers(obj, path=""):
    """Yield (path, value) for every number in a nested dict."""
    if isinstance(obj, dict):
        for k, v in obj.items():
            yield from iter_numbers(v, f"{path}.{k}" if path else k)
    elif isinstance(obj, (list, tuple)):
        for i, v in enumerate(obj):
            yield from iter_numbers(v, f"{path}[{i}]")
    elif isinstance(obj, (int, float)) and not isinstance(obj, bool):
        yield path, obj


@pytest.fixture
def assert_all_finite():
    def _check(result):
        bad = [(p, v) for p, v in iter_numbers(result.to_dict()) if not math.isfinite(v)]
        assert bad == []
    return _check
