import pytest

from arkconfig.servers import ServerRegistry
from arkconfig.session import ConfigFileId, ConfigSession
from arkconfig.storage import InMemoryConfigStorage, LocalConfigStorage

SAMPLE_GUS = """[ServerSettings]
SessionName=My Island
XPMultiplier=1.0
ServerPVE=False

[MessageOfTheDay]
Message=Welcome
Duration=20
"""


@pytest.fixture
def sample_text():
    return SAMPLE_GUS


@pytest.fixture
def memory_storage():
    return InMemoryConfigStorage({("1", "GameUserSettings"): SAMPLE_GUS, ("1", "Game"): ""})


@pytest.fixture
def session():
    return ConfigSession(ConfigFileId("1", "GameUserSettings"), SAMPLE_GUS)


@pytest.fixture
def registry(tmp_path):
    return ServerRegistry(str(tmp_path / "servers.json"))


@pytest.fixture
def local_storage(registry, tmp_path):
    registry.add("main", str(tmp_path / "server"), "ASA", "Main")
    return LocalConfigStorage(registry, backup_on_save=True, backup_keep=2)
