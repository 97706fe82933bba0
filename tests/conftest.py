import pytest

from fakes import FakeUpstream, make_settings


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def config():
    return make_settings()
