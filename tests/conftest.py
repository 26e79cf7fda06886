import pytest

from core import Calculator, Environment


@pytest.fixture
def env():
    return Environment()


@pytest.fixture
def calc(env):
    return Calculator(env)
