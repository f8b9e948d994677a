import pytest

from templatehash.setup import setup


@pytest.fixture(autouse=True)
def default_setup():
    """Every test starts from the default library configuration"""
    setup(check_input_index=True)
    yield
    setup(check_input_index=True)
