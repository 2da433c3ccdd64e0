import pytest

from core.config import SystemConfig
from server.service import CollisionService
from tests.helpers import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    cfg = SystemConfig()
    cfg.enable_logging = False
    cfg.log_file = None
    cfg.demo.seed = 1234
    return cfg


@pytest.fixture
def service(config, clock):
    return CollisionService(config, clock=clock)
