import pytest

from tests.unit.governance.fakes import FakeAccessPort


@pytest.fixture
def access_port():
    return FakeAccessPort()
