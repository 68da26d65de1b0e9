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
# cSpotStore.py
#
# The live bandmap: every recent spot, ordered by frequency, guarded by one
# lock. Ingestion, aging, view construction and persistence all pass through
# here, so readers never see a half-finished merge.
#

from __future__ import annotations

import bisect
import threading
from collections.abc import Callable, Iterable

from .cBands import cBands
from .cCommon import cCommon
from .cConfig import cConfig
from .cCountry import cCountryLookup
from .cSpot import TOLERANCE_HZ, cSpot

class cSpotStore:
    def __init__(
        self,
        config:         cConfig.cBandmap,
        country_lookup: cCountryLookup | None = None,
        zone_exchange:  Callable[[str], str | None] | None = None,
    ) -> None:
        self.config         = config
        self.country_lookup = country_lookup
        self.zone_exchange  = zone_exchange

        self._lock           = threading.Lock()
        self._spots: list[cSpot] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._spots)

    @property
    def fresh(self) -> int:
        return self.config.LIFETIME

    def add_or_refresh(self, call: str, frequency: int, node: str = ' ') -> None:
        """
        Add a spot, or refresh the one already held for the same call, band and mode.

        A refreshed spot only moves when the new report is more than TOLERANCE_HZ
        away. Whichever spot was just added or moved survives; a neighbour closer
        than TOLERANCE_HZ on either side is dropped.
        """
        if not call:
            return

        if (Band := cBands.which_band(frequency)) is None:
            return

        Mode = cBands.freq_to_mode(frequency, Band)

        with self._lock:
            Index = self._find(call, Band, Mode)

            if Index is not None:
                Spot = self._spots[Index]
                Spot.ttl  = self.fresh
                Spot.node = node

                if Spot.distance(frequency) > TOLERANCE_HZ:
                    del self._spots[Index]
                    Spot.frequency = frequency
                    Index = self._insert(Spot)
            else:
                Index = self._insert(self._new_spot(call, frequency, Band, Mode, node))

            self._drop_neighbours(Index)

    def age_tick(self) -> None:
        with self._lock:
            for Spot in self._spots:
                if Spot.ttl > 0:
                    Spot.ttl -= 1

            self._spots[:] = [Spot for Spot in self._spots if Spot.ttl > 0]

    def filtered_copies(self, select: Callable[[cSpot], bool]) -> list[cSpot]:
        """
        Copies of the spots accepted by select, in frequency order.

        select runs under the lock and may update the transient dupe flag of
        the spot it is given.
        """
        with self._lock:
            return [Spot.copy() for Spot in self._spots if select(Spot)]

    def snapshot_for_persistence(self) -> list[cSpot]:
        with self._lock:
            return [Spot.copy() for Spot in self._spots]

    def restore_from_persistence(self, entries: Iterable[cSpot], elapsed_seconds: int) -> int:
        """
        Insert saved spots, reducing their ttl by the time the program was down.

        Spots that would expire, or that collide with a spot already held, are
        dropped. Returns the number of spots restored.
        """
        Elapsed  = max(elapsed_seconds, 0)
        Restored = 0

        with self._lock:
            for Entry in entries:
                if not Entry.call or Entry.ttl <= Elapsed:
                    continue

                if self._find(Entry.call, Entry.band, Entry.mode) is not None:
                    continue

                if any(Spot.distance(Entry.frequency) < TOLERANCE_HZ for Spot in self._neighbours_of(Entry.frequency)):
                    continue

                Spot = Entry.copy()
                Spot.ttl = min(Spot.ttl - Elapsed, self.fresh)
                self._insert(Spot)
                Restored += 1

        return Restored

    def _find(self, call: str, band: int, mode: int) -> int | None:
        return next(
            (Index for Index, Spot in enumerate(self._spots)
            if Spot.call == call and Spot.band == band and Spot.mode == mode),
            None
        )

    def _insert(self, spot: cSpot) -> int:
        Index = bisect.bisect_right(self._spots, spot.frequency, key=lambda Spot: Spot.frequency)
        self._spots.insert(Index, spot)
        return Index

    def _neighbours_of(self, frequency: int) -> list[cSpot]:
        Index = bisect.bisect_left(self._spots, frequency, key=lambda Spot: Spot.frequency)
        return self._spots[max(Index - 1, 0):Index + 1]

    def _drop_neighbours(self, index: int) -> None:
        Frequency = self._spots[index].frequency

        if index + 1 < len(self._spots) and self._spots[index + 1].distance(Frequency) < TOLERANCE_HZ:
            del self._spots[index + 1]

        if index > 0 and self._spots[index - 1].distance(Frequency) < TOLERANCE_HZ:
            del self._spots[index - 1]

    def _new_spot(self, call: str, frequency: int, band: int, mode: int, node: str) -> cSpot:
        Spot = cSpot(
            call      = call,
            frequency = frequency,
            mode      = mode,
            band      = band,
            node      = node,
            ttl       = self.fresh,
        )

        if self.country_lookup is None or not (CountryIndex := self.country_lookup.country_index(call)):
            return Spot

        Country = self.country_lookup.country(CountryIndex)

        Spot.cq_zone       = Country.cq_zone
        Spot.country_index = CountryIndex
        Spot.prefix        = Country.prefix

        if self.zone_exchange is not None and (Exchange := self.zone_exchange(call)) is not None:
            Spot.cq_zone = cCommon.atoi(Exchange)

        return Spot
