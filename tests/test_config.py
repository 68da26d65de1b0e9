"""
Configuration tests
"""

import asyncio

import pytest

from bandmap.cBands import cBands
from bandmap.cConfig import cConfig
from bandmap.cSpot import cMode

CFG = """
CONTEST = 'cqww'
BAND = 40
MODE = 'SSB'
RIG_FREQUENCY = 7150.5
MY_NODE = 'Bravo'
ADI_FILE = 'contest.adi'
BANDMAP = {
    'SHOW_DUPES': False,
    'LIFETIME':   600,
}
SCREEN = {
    'ROWS':    5,
    'COLUMNS': 4,
}
LOG_FILE = {
    'ENABLED':   True,
    'FILE_NAME': 'spots.log',
}
"""


def init(tmp_path, monkeypatch, text, argv=()):
    (tmp_path / cConfig.CONFIG_FILE).write_text(text)
    monkeypatch.chdir(tmp_path)
    asyncio.run(cConfig.init(list(argv)))


class TestToggle:
    def test_keys(self):
        bandmap = cConfig.cBandmap()

        assert bandmap.toggle('b')
        assert bandmap.toggle('O')
        assert (bandmap.ALL_BANDS, bandmap.ALL_MODES, bandmap.SHOW_DUPES, bandmap.ONLY_MULTS) == (False, True, True, True)

    def test_unknown_key(self):
        bandmap = cConfig.cBandmap()

        assert not bandmap.toggle('X')
        assert bandmap == cConfig.cBandmap()


class TestInit:
    def test_values_from_file(self, tmp_path, monkeypatch):
        init(tmp_path, monkeypatch, CFG)

        assert cConfig.CONTEST == 'CQWW'
        assert cConfig.BAND == 40
        assert cConfig.MODE == cMode.SSB
        assert cConfig.CENTER_FREQUENCY == 7150500
        assert cConfig.MY_NODE == 'B'
        assert cConfig.ADI_FILE == 'contest.adi'
        assert cConfig.BANDMAP.SHOW_DUPES is False
        assert cConfig.BANDMAP.ALL_BANDS is True
        assert cConfig.BANDMAP.LIFETIME == 600
        assert cConfig.SCREEN.capacity == 20
        assert cConfig.LOG_FILE.ENABLED and cConfig.LOG_FILE.FILE_NAME == 'spots.log'

    def test_defaults(self, tmp_path, monkeypatch):
        init(tmp_path, monkeypatch, '')

        assert cConfig.CONTEST == 'GENERAL'
        assert cConfig.BAND == 20
        assert cConfig.MODE == cMode.CW
        assert cConfig.CENTER_FREQUENCY is None
        assert cConfig.BMDATA_FILE == '.bmdata.dat'
        assert cConfig.BANDMAP == cConfig.cBandmap()
        assert cConfig.SCREEN.capacity == 30

    def test_command_line_overrides(self, tmp_path, monkeypatch):
        init(tmp_path, monkeypatch, CFG, ['-b', '15', '-m', 'CW', '-f', '21025', '-c', 'WAE', '-n', 'C', '-l', 'other.log'])

        assert cConfig.BAND == 15
        assert cConfig.MODE == cMode.CW
        assert cConfig.CENTER_FREQUENCY == 21025000
        assert cConfig.CONTEST == 'WAE'
        assert cConfig.MY_NODE == 'C'
        assert cConfig.LOG_FILE.FILE_NAME == 'other.log'

    def test_bad_lifetime_falls_back(self, tmp_path, monkeypatch):
        init(tmp_path, monkeypatch, "BANDMAP = {'LIFETIME': 0}")

        assert cConfig.BANDMAP.LIFETIME == cConfig.cBandmap.LIFETIME

    def test_bad_multiplier_falls_back(self, tmp_path, monkeypatch):
        init(tmp_path, monkeypatch, "MULTIPLIER = 'grid'")

        assert cConfig.MULTIPLIER == 'country'

    def test_bad_band_exits(self, tmp_path, monkeypatch):
        monkeypatch.setattr('bandmap.cCommon.time.sleep', lambda seconds: None)

        with pytest.raises(SystemExit):
            init(tmp_path, monkeypatch, 'BAND = 6')


class TestBands:
    def test_which_band(self):
        assert cBands.which_band(1_830_000) == 160
        assert cBands.which_band(14_350_000) == 20
        assert cBands.which_band(14_350_001) is None
        assert cBands.which_band(50_100_000) is None

    def test_center_frequency(self):
        assert cBands.center_frequency(20, cMode.CW) == 14_035_000
        assert cBands.center_frequency(20, cMode.SSB) == 14_225_000
        assert cBands.center_frequency(20, cMode.DIGI) == 14_085_000

    def test_warc(self):
        assert [band for band in cBands.bands() if cBands.is_warc(band)] == [60, 30, 17, 12]
