"""

     The MIT License (MIT)

     Copyright (c) 2015-2025 Mark J Glenn

     Permission is hereby granted, free of charge, to any person obtaining a copy
     of this software and associated documentation files (the "Software"), to deal
     in the Software without restriction, including without limitation the rights
     to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
     copies of the Software, and to permit persons to whom the Software is
     furnished to do so, subject to the following conditions:

     The above copyright notice and this permission notice shall be included in all
     copies or substantial portions of the Software.

     THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
     IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
     FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
     AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
     LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
     OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
     SOFTWARE.

"""
#
# cFilterView.py
#
# Per refresh snapshot of the bandmap, filtered by the operator's display
# settings. The view owns its copies; nothing in it refers back to the store.
#

from __future__ import annotations

from .cBands import cBands
from .cConfig import cConfig
from .cMultiplier import cDupeCheck, cMultiplier, cMultiplierCheck
from .cSpot import TOLERANCE_HZ, cSpot
from .cSpotStore import cSpotStore

tView = tuple[cSpot, ...]

class cFilterView:
    def __init__(self, dupe_check: cDupeCheck, multiplier_check: cMultiplierCheck) -> None:
        self.dupe_check       = dupe_check
        self.multiplier_check = multiplier_check

    def is_multiplier(self, spot: cSpot | None) -> bool:
        return cMultiplier.is_multiplier(spot, self.multiplier_check)

    def build(self, store: cSpotStore, config: cConfig.cBandmap, band: int, mode: int, contest_mode: bool) -> tView:
        def select(Spot: cSpot) -> bool:
            Spot.dupe = self.dupe_check.is_dupe(Spot.call, Spot.band)

            # WARC bands carry no contest QSOs
            if contest_mode and cBands.is_warc(Spot.band):
                return False

            if Spot.dupe and not config.SHOW_DUPES:
                return False

            if config.ONLY_MULTS and not self.is_multiplier(Spot):
                return False

            return (config.ALL_BANDS or Spot.band == band) and (config.ALL_MODES or Spot.mode == mode)

        # outside the store lock; select only reads the prepared sets
        self.multiplier_check.refresh()

        return tuple(store.filtered_copies(select))

    @staticmethod
    def lookup_by_call_substring(view: tView, needle: str) -> cSpot | None:
        """First (lowest frequency) spot whose call contains needle."""
        if not needle:
            return None

        return next((Spot.copy() for Spot in view if needle in Spot.call), None)

    @staticmethod
    def lookup_adjacent(view: tView, upwards: bool, frequency: int, config: cConfig.cBandmap) -> cSpot | None:
        """
        Next spot above (or below) frequency.

        The search starts half a tolerance away from frequency so that the spot
        the rig is sitting on is not found again. Dupes are passed over when
        config.SKIP_DUPES is set.
        """
        if upwards:
            Reference = frequency + TOLERANCE_HZ // 2
            Candidates = (Spot for Spot in view if Spot.frequency > Reference)
        else:
            Reference = frequency - TOLERANCE_HZ // 2
            Candidates = (Spot for Spot in reversed(view) if Spot.frequency < Reference)

        return next((Spot.copy() for Spot in Candidates if not (config.SKIP_DUPES and Spot.dupe)), None)

    @staticmethod
    def spot_on_frequency(view: tView, frequency: int, config: cConfig.cBandmap) -> cSpot | None:
        return next(
            (Spot.copy() for Spot in view
            if Spot.distance(frequency) < TOLERANCE_HZ and not (config.SKIP_DUPES and Spot.dupe)),
            None
        )
