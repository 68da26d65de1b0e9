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
# cMultiplier.py
#
# Dupe and multiplier checks applied while building the bandmap view.
#

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar, Literal, Protocol

from .cBands import cBands
from .cQtc import cQtcStore
from .cSpot import cSpot
from .cWorkedLog import cWorkedLog, cWorkedLookup

class cMultiplierCheck(Protocol):
    def refresh(self) -> None: ...
    def is_multiplier(self, spot: cSpot) -> bool: ...

class cDupeCheck:
    def __init__(self, worked_log: cWorkedLookup | None = None, qtc: cQtcStore | None = None) -> None:
        self.worked_log = worked_log
        self.qtc        = qtc

    def is_dupe(self, call: str, band: int) -> bool:
        if cBands.is_warc(band) or self.worked_log is None:
            return False

        if (Entry := self.worked_log.lookup(call)) is None:
            return False

        if self.qtc is not None and self.qtc.keeps_worked_station_active(call):
            return False

        if self.worked_log.worked_on_band(Entry, band):
            return self.worked_log.worked_in_current_period(Entry, band)

        return False

class cGeneralMultiplier:
    """New country and/or CQ zone on the spot's band, judged against the worked log."""

    def __init__(self, worked_log: cWorkedLog | None, kind: Literal['country', 'zone', 'both'] = 'country') -> None:
        self.worked_log = worked_log
        self.kind       = kind

        self._generation = -1

        # ((country, band) pairs, (zone, band) pairs) worked; replaced as a whole
        self._worked: tuple[frozenset[tuple[int, int]], frozenset[tuple[int, int]]] = (frozenset(), frozenset())
        self.refresh()

    def refresh(self) -> None:
        """Rebuild the worked country and zone sets if the log was reloaded."""
        if self.worked_log is None or self.worked_log.generation == self._generation:
            return

        Generation = self.worked_log.generation
        Countries: set[tuple[int, int]] = set()
        Zones:     set[tuple[int, int]] = set()

        for Entry in self.worked_log.entries():
            for Band in Entry.bands:
                if Entry.country_index > 0:
                    Countries.add((Entry.country_index, Band))
                if Entry.cq_zone > 0:
                    Zones.add((Entry.cq_zone, Band))

        self._worked = (frozenset(Countries), frozenset(Zones))
        self._generation = Generation

    def is_multiplier(self, spot: cSpot) -> bool:
        """Judged against the log as of the last refresh()."""
        Countries, Zones = self._worked

        NewCountry = (spot.country_index, spot.band) not in Countries
        NewZone    = (spot.cq_zone, spot.band) not in Zones

        match self.kind:
            case 'country':
                return NewCountry
            case 'zone':
                return NewZone
            case _:
                return NewCountry or NewZone

class cMultiplier:
    # contest type -> factory for its own multiplier check
    CONTEST_CHECKS: ClassVar[dict[str, Callable[[cWorkedLog | None], cMultiplierCheck]]] = {
        'CQWW': lambda worked_log: cGeneralMultiplier(worked_log, 'both'),
    }

    @classmethod
    def check_for(cls, contest: str, worked_log: cWorkedLog | None, kind: Literal['country', 'zone', 'both'] = 'country') -> cMultiplierCheck:
        if (Factory := cls.CONTEST_CHECKS.get(contest)) is not None:
            return Factory(worked_log)

        return cGeneralMultiplier(worked_log, kind)

    @staticmethod
    def is_multiplier(spot: cSpot | None, check: cMultiplierCheck) -> bool:
        if spot is None or spot.cq_zone <= 0 or spot.country_index <= 0:
            return False

        return check.is_multiplier(spot)
