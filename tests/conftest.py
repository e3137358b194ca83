import matplotlib

matplotlib.use("Agg")

import pytest

from precise_node import make_kerbol_system


@pytest.fixture
def bodies():
    return make_kerbol_system()


@pytest.fixture
def kerbin(bodies):
    return bodies["Kerbin"]
