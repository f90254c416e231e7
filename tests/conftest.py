import itertools
import logging

import pytest

from pillsplit_core.shapes import CornerStyle, Shape


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    for name in ("pillsplit_core", "pillsplit_playground"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def ids():
    """Id allocator starting at 100 so fresh ids are easy to spot."""
    return itertools.count(100).__next__


def make_shape(shape_id=0, x=0.0, y=0.0, width=100.0, height=100.0, color="#3b82f6"):
    return Shape(id=shape_id, x=x, y=y, width=width, height=height, color=color, corners=CornerStyle.uniform())
