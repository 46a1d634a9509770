"""Shared test fixtures."""

import pytest

from tests.fakes import make_png


@pytest.fixture
def png_bytes():
    return make_png()
