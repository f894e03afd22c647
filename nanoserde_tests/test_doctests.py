import doctest
import importlib
import pkgutil

import pytest

import nanoserde


def _module_names() -> list[str]:
    names = [nanoserde.__name__]
    for module_info in pkgutil.walk_packages(nanoserde.__path__, prefix=f'{nanoserde.__name__}.'):
        names.append(module_info.name)
    return sorted(names)


@pytest.mark.parametrize('module_name', _module_names())
def test_docstrings(module_name: str) -> None:
    module = importlib.import_module(module_name)
    result = doctest.testmod(module, optionflags=doctest.ELLIPSIS)
    assert result.failed == 0, f'{result.failed} of {result.attempted} examples failed in {module_name}'
