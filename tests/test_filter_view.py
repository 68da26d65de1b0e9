"""
Filtered view and lookup tests
"""

import pytest

from bandmap.cConfig import cConfig
from bandmap.cFilterView import cFilterView
from bandmap.cMultiplier import cDupeCheck, cGeneralMultiplier, cMultiplier
from bandmap.cSpot import cMode
from bandmap.cSpotStore import cSpotStore
from bandmap.cWorkedLog import cWorkedLog

ADIF = """Log exported for tests
<eoh>
<call:6>DL1ABC <qso_date:8>20250101 <time_on:4>1200 <band:3>20m <mode:2>CW <eor>
<call:4>JA1X <qso_date:8>20250101 <time_on:6>123000 <freq:6>7.0250 <mode:2>CW <eor>
"""


@pytest.fixture
def worked_log(countries):
    log = cWorkedLog(0, countries)
    log.load(ADIF)
    return log


@pytest.fixture
def filled_store(config, countries):
    store = cSpotStore(config, countries)
    store.add_or_refresh('K1XX', 10110000)
    store.add_or_refresh('DL1ABC', 14025000)
    store.add_or_refresh('W1AW', 14030000)
    store.add_or_refresh('DL2ZZ', 14250000)
    store.add_or_refresh('JA1Y', 7010000)
    return store


@pytest.fixture
def filter_view(worked_log):
    return cFilterView(cDupeCheck(worked_log), cMultiplier.check_for('GENERAL', worked_log, 'country'))


def calls(view):
    return [spot.call for spot in view]


class TestBuild:
    def test_contest_mode_hides_warc(self, filter_view, filled_store, config):
        view = filter_view.build(filled_store, config, 20, cMode.CW, True)

        assert calls(view) == ['JA1Y', 'DL1ABC', 'W1AW', 'DL2ZZ']

    def test_warc_shown_outside_contest_mode(self, filter_view, filled_store, config):
        view = filter_view.build(filled_store, config, 20, cMode.CW, False)

        assert calls(view) == ['JA1Y', 'K1XX', 'DL1ABC', 'W1AW', 'DL2ZZ']

    def test_dupe_flag_set(self, filter_view, filled_store, config):
        view = filter_view.build(filled_store, config, 20, cMode.CW, True)

        assert [spot.call for spot in view if spot.dupe] == ['DL1ABC']

    def test_hide_dupes(self, filter_view, filled_store):
        config = cConfig.cBandmap(SHOW_DUPES=False)

        view = filter_view.build(filled_store, config, 20, cMode.CW, True)

        assert 'DL1ABC' not in calls(view)

    def test_own_band_and_mode(self, filter_view, filled_store):
        config = cConfig.cBandmap(ALL_BANDS=False, ALL_MODES=False)

        view = filter_view.build(filled_store, config, 20, cMode.CW, True)

        assert calls(view) == ['DL1ABC', 'W1AW']

    def test_only_multipliers(self, filter_view, filled_store):
        config = cConfig.cBandmap(ONLY_MULTS=True)

        view = filter_view.build(filled_store, config, 20, cMode.CW, True)

        # Germany already worked on 20 m, Japan on 40 m
        assert calls(view) == ['W1AW']

    def test_multiplier_sets_rebuilt_before_store_is_locked(self, worked_log, filled_store, monkeypatch):
        check = cGeneralMultiplier(worked_log, 'country')
        filter_view = cFilterView(cDupeCheck(worked_log), check)
        events = []

        refresh = check.refresh
        filtered_copies = filled_store.filtered_copies

        def recording_refresh():
            events.append('refresh')
            refresh()

        def recording_filtered_copies(select):
            events.append('copies')
            return filtered_copies(select)

        monkeypatch.setattr(check, 'refresh', recording_refresh)
        monkeypatch.setattr(filled_store, 'filtered_copies', recording_filtered_copies)

        worked_log.load(ADIF + '<call:4>W1AW <qso_date:8>20250101 <time_on:4>1300 <band:3>20m <eor>\n')
        view = filter_view.build(filled_store, cConfig.cBandmap(ONLY_MULTS=True), 20, cMode.CW, True)

        assert events == ['refresh', 'copies']
        assert calls(view) == []

    def test_view_is_a_copy(self, filter_view, filled_store, config):
        view = filter_view.build(filled_store, config, 20, cMode.CW, True)
        view[0].call = 'CHANGED'

        assert 'CHANGED' not in calls(filled_store.snapshot_for_persistence())


class TestLookups:
    @pytest.fixture
    def view(self, filter_view, filled_store, config):
        return filter_view.build(filled_store, config, 20, cMode.CW, True)

    def test_call_substring(self, view):
        assert cFilterView.lookup_by_call_substring(view, '1A').call == 'DL1ABC'
        assert cFilterView.lookup_by_call_substring(view, 'ZZ').call == 'DL2ZZ'
        assert cFilterView.lookup_by_call_substring(view, 'QQQ') is None
        assert cFilterView.lookup_by_call_substring(view, '') is None

    def test_adjacent_upwards(self, view, config):
        assert cFilterView.lookup_adjacent(view, True, 14025000, config).call == 'W1AW'
        assert cFilterView.lookup_adjacent(view, True, 14250000, config) is None

    def test_adjacent_downwards_skips_dupes(self, view, config):
        assert cFilterView.lookup_adjacent(view, False, 14030000, config).call == 'JA1Y'

    def test_adjacent_returns_dupes_when_not_skipping(self, view):
        config = cConfig.cBandmap(SKIP_DUPES=False)

        assert cFilterView.lookup_adjacent(view, False, 14030000, config).call == 'DL1ABC'
        assert cFilterView.lookup_adjacent(view, True, 14000000, config).call == 'DL1ABC'

    def test_skip_dupes_follows_toggled_config(self, view, config):
        assert cFilterView.lookup_adjacent(view, True, 14000000, config).call == 'W1AW'

        config.SKIP_DUPES = False

        assert cFilterView.lookup_adjacent(view, True, 14000000, config).call == 'DL1ABC'

    def test_adjacent_ignores_spot_under_the_rig(self, view, config):
        assert cFilterView.lookup_adjacent(view, True, 14029960, config).call == 'DL2ZZ'

    def test_spot_on_frequency(self, view, config):
        assert cFilterView.spot_on_frequency(view, 14030050, config).call == 'W1AW'
        assert cFilterView.spot_on_frequency(view, 14025040, config) is None
        assert cFilterView.spot_on_frequency(view, 14027000, config) is None

    def test_spot_on_frequency_returns_dupe_when_not_skipping(self, view):
        config = cConfig.cBandmap(SKIP_DUPES=False)

        assert cFilterView.spot_on_frequency(view, 14025040, config).call == 'DL1ABC'
