import pytest

from bandmap.cConfig import cConfig
from bandmap.cCountry import cCountry
from bandmap.cSpotStore import cSpotStore
from bandmap.cUtil import cDisplay


class FakeCountries:
    """Country lookup by the first two letters of a call."""

    table = {
        'DL': cCountry('Fed. Rep. of Germany', 14, 28, 'EU', 'DL'),
        'W1': cCountry('United States', 5, 8, 'NA', 'K'),
        'JA': cCountry('Japan', 25, 45, 'AS', 'JA'),
    }

    def __init__(self):
        self.indexes = list(self.table)

    def country_index(self, call):
        prefix = call[:2]
        return self.indexes.index(prefix) + 1 if prefix in self.table else None

    def country(self, index):
        return self.table[self.indexes[index - 1]]


@pytest.fixture(autouse=True)
def _reset_config():
    """Each test starts from the class defaults of cConfig."""
    saved = (cConfig.BANDMAP, cConfig.LOG_FILE, cConfig.SCREEN, cConfig.VERBOSE, cConfig.LOG_BAD_SPOTS)
    cConfig.BANDMAP = cConfig.cBandmap()
    cConfig.LOG_FILE = cConfig.cLogFile()
    cConfig.SCREEN = cConfig.cScreen()
    cConfig.VERBOSE = False
    cConfig.LOG_BAD_SPOTS = False
    cDisplay.last_status = None
    yield
    cConfig.BANDMAP, cConfig.LOG_FILE, cConfig.SCREEN, cConfig.VERBOSE, cConfig.LOG_BAD_SPOTS = saved


@pytest.fixture
def config():
    return cConfig.cBandmap(LIFETIME=900)


@pytest.fixture
def store(config):
    return cSpotStore(config)


@pytest.fixture
def countries():
    return FakeCountries()
