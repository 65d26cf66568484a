import numpy as np
import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--seed",
        action="store",
        default="1234",
        help="Seed for the random source used by the tests",
    )


@pytest.fixture
def seed(request):
    """Seed selected on the command line."""
    return int(request.config.getoption("--seed"))


@pytest.fixture
def rng(seed):
    """Fresh numpy Generator per test."""
    return np.random.default_rng(seed)
