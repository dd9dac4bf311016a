import logging

import pytest

from payments_engine.logging_config import HANDLER_NAME


@pytest.fixture(autouse=True)
def _drop_stderr_handler():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
