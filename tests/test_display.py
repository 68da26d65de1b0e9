"""
Bandmap rendering tests
"""

import pytest

from bandmap.cBandmapDisplay import cBandmapDisplay
from bandmap.cConfig import cConfig
from bandmap.cFilterView import cFilterView
from bandmap.cMultiplier import cDupeCheck, cMultiplier
from bandmap.cQtc import cQtcStore
from bandmap.cSpot import cMode
from bandmap.cSpotStore import cSpotStore
from bandmap.cWindow import cWindow
from bandmap.cWorkedLog import cWorkedLog

ADIF = '<eoh><call:6>DL1ABC <qso_date:8>20250301 <time_on:4>1200 <band:3>20m <eor>'
CENTER = 14_025_000


@pytest.fixture
def filter_view(countries):
    log = cWorkedLog(0, countries)
    log.load(ADIF)
    return cFilterView(cDupeCheck(log), cMultiplier.check_for('GENERAL', log))


@pytest.fixture
def store(config, countries):
    store = cSpotStore(config, countries)
    store.add_or_refresh('DL1ABC', 14020000, 'A')
    store.add_or_refresh('JA1XYZ', 14030000, 'B')
    return store


def render(filter_view, store, config, screen, center=CENTER, have_center=True, qtc=None):
    display = cBandmapDisplay(filter_view, config, screen, 'A', qtc)
    view = filter_view.build(store, config, 20, cMode.CW, True)
    window = cWindow.select(view, center, screen.capacity, have_center)
    return display, display.render(view, window, center, color=False)


class TestCells:
    def test_layout(self, filter_view, store, config):
        screen = cConfig.cScreen(ROWS=3, COLUMNS=2)

        _, lines = render(filter_view, store, config, screen)

        assert lines[0].startswith('14020.0*  dl1abc')
        assert lines[1].startswith(f'14025.0   {"=" * 12}')
        assert lines[2].startswith('14030.0BM JA1XYZ')
        assert lines[3] == ' bands: all  modes: all  dupes: yes  onl.ml: no'

    def test_columns_fill_top_to_bottom(self, filter_view, store, config):
        screen = cConfig.cScreen(ROWS=2, COLUMNS=2)

        _, lines = render(filter_view, store, config, screen)

        assert len(lines) == 3
        assert lines[0].startswith('14020.0')
        assert lines[1].startswith('14025.0')
        assert '14030.0' in lines[0][cBandmapDisplay.COLUMN_WIDTH:]

    def test_spot_on_center_is_highlighted(self, filter_view, store, config):
        display, _ = render(filter_view, store, config, cConfig.cScreen())
        view = filter_view.build(store, config, 20, cMode.CW, True)
        window = cWindow.select(view, 14030020, 30)

        cells = display.cells(view, window, 14030020)

        assert [cell.style for cell in cells] == ['DUPE', 'CENTER']
        assert 'JA1XYZ' in cells[1].text

    def test_age_styles(self, filter_view, store, config):
        display, _ = render(filter_view, store, config, cConfig.cScreen())
        view = filter_view.build(store, config, 20, cMode.CW, True)

        assert display.spot_cell(view[1]).style == 'NEW'
        view[1].ttl = 100
        assert display.spot_cell(view[1]).style == 'OLD'

    def test_hidden_dupes_not_lowercased(self, filter_view, store):
        config = cConfig.cBandmap(SHOW_DUPES=False)

        _, lines = render(filter_view, store, config, cConfig.cScreen(ROWS=3, COLUMNS=1))

        assert 'dl1abc' not in ''.join(lines)
        assert lines[-1].endswith('dupes: no  onl.ml: no')

    def test_without_center_no_marker(self, filter_view, store, config):
        _, lines = render(filter_view, store, config, cConfig.cScreen(ROWS=3, COLUMNS=1), have_center=False)

        assert '=' * 12 not in ''.join(lines)
        assert lines[1].startswith('14030.0')

    def test_qtc_flag(self, filter_view, store, config):
        qtc = cQtcStore()
        qtc.set_flag('JA1XYZ', 'P')

        _, lines = render(filter_view, store, config, cConfig.cScreen(ROWS=3, COLUMNS=1), qtc=qtc)

        assert 'JA1XYZ P' in lines[2]

    def test_color(self, filter_view, store, config):
        display = cBandmapDisplay(filter_view, config, cConfig.cScreen(ROWS=3, COLUMNS=1))
        view = filter_view.build(store, config, 20, cMode.CW, True)
        window = cWindow.select(view, CENTER, 3)

        lines = display.render(view, window, CENTER, color=True)

        assert lines[1].startswith('\033[7;32m')
        assert '\033[0m' in lines[1]
