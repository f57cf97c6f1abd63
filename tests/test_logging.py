import inspect
import logging

import pytest

from schoolhub.core.logging import log_function_call

log = logging.getLogger("schoolhub.tests")


@log_function_call(log)
async def add(a, b):
    return a + b


@log_function_call(log)
async def explode():
    raise RuntimeError("boom")


def test_decorated_coroutine_keeps_its_identity():
    assert inspect.iscoroutinefunction(add)
    assert add.__name__ == "add"


async def test_decorated_coroutine_returns_result():
    assert await add(2, 3) == 5


async def test_decorated_coroutine_logs_and_reraises(caplog):
    with caplog.at_level(logging.DEBUG, logger="schoolhub.tests"):
        with pytest.raises(RuntimeError):
            await explode()

    messages = [record.getMessage() for record in caplog.records]
    assert "Entering function: explode" in messages
    assert "Error in function: explode" in messages
