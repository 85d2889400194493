import pytest

from cipherbrute.classical import register_all


ENGLISH = (
    "it was the best of times and it was the worst of times. the people of the "
    "town went about their work in the morning and came home in the evening to "
    "eat with their families, and when the night came they slept as well as they could."
)


@pytest.fixture(autouse=True, scope="session")
def _plugins():
    register_all()


@pytest.fixture
def english():
    return ENGLISH
