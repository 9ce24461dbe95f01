import importlib

import pytest


@pytest.mark.parametrize(
    "name", ["memo", "memo.models", "memo.modules", "memo.services", "mock_upstream"]
)
def test_every_package_is_a_regular_package(name):
    """setuptools' find_packages skips namespace packages, which would drop them from the wheel."""
    module = importlib.import_module(name)
    assert module.__file__ is not None
    assert module.__file__.endswith("__init__.py")
