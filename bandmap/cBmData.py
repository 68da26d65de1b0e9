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
# cBmData.py
#
# Saves the bandmap to a small text file and restores it on the next start,
# so a restart does not throw away the spots collected so far.
#
# Line 1 is the save time (Unix seconds). Every other line is one spot:
#
#   call;frequency;mode;band;node;ttl;dupe;cqzone;country_index;prefix
#

from __future__ import annotations

import time
from collections.abc import Iterable
from typing import Final

import aiofiles

from .cCommon import cCommon
from .cSpot import cSpot
from .cSpotStore import cSpotStore
from .cUtil import cDisplay

class cBmData:
    DELIMITER: Final[str] = ';'
    FIELDS:    Final[int] = 10

    def __init__(self, path: str = '.bmdata.dat') -> None:
        self.path = path
        self._parsed = False

    @classmethod
    def encode(cls, spot: cSpot) -> str | None:
        if not spot.call or cls.DELIMITER in spot.call:
            return None

        Prefix = spot.prefix.replace(cls.DELIMITER, '').rstrip()
        Node = (spot.node or ' ')[0]

        return cls.DELIMITER.join((
            spot.call,
            str(spot.frequency),
            str(spot.mode),
            str(spot.band),
            Node,
            str(spot.ttl),
            str(int(spot.dupe)),
            str(spot.cq_zone),
            str(spot.country_index),
            Prefix,
        ))

    @classmethod
    def decode(cls, line: str) -> cSpot | None:
        """Unreadable numbers become 0 and missing fields stay empty; only a line without a call is rejected."""
        line = line.rstrip('\r\n')

        if not line:
            return None

        Fields = line.split(cls.DELIMITER, cls.FIELDS - 1)
        Fields += [''] * (cls.FIELDS - len(Fields))

        Call, Frequency, Mode, Band, Node, Ttl, Dupe, CqZone, CountryIndex, Prefix = Fields

        if not Call:
            return None

        return cSpot(
            call          = Call,
            frequency     = cCommon.atoi(Frequency),
            mode          = cCommon.atoi(Mode),
            band          = cCommon.atoi(Band),
            node          = Node[:1] or ' ',
            ttl           = cCommon.atoi(Ttl),
            dupe          = cCommon.atoi(Dupe) != 0,
            cq_zone       = cCommon.atoi(CqZone),
            country_index = cCommon.atoi(CountryIndex),
            prefix        = Prefix.rstrip(),
        )

    @classmethod
    def format_snapshot(cls, saved_time: int, spots: Iterable[cSpot]) -> str:
        Lines = [str(saved_time)]
        Lines.extend(Line for Spot in spots if (Line := cls.encode(Spot)) is not None)
        return '\n'.join(Lines) + '\n'

    @classmethod
    def parse_snapshot(cls, text: str, now: int) -> tuple[int, list[cSpot]]:
        """(seconds since the save, spots); the elapsed time never goes negative."""
        Lines = text.splitlines()

        if not Lines:
            return 0, []

        Elapsed = max(now - cCommon.atoi(Lines[0]), 0)
        Spots = [Spot for Line in Lines[1:] if (Spot := cls.decode(Line)) is not None]

        return Elapsed, Spots

    async def save_async(self, store: cSpotStore, now: int | None = None) -> bool:
        Now = int(time.time()) if now is None else now
        Text = self.format_snapshot(Now, store.snapshot_for_persistence())

        try:
            async with aiofiles.open(self.path, 'w', encoding='utf-8') as file:
                await file.write(Text)
        except OSError:
            cDisplay.status("can't open bandmap data file!")
            return False

        return True

    async def load_async(self, store: cSpotStore, now: int | None = None) -> int:
        """Restore the saved spots once per run. Returns the number of spots restored."""
        if self._parsed:
            return 0

        try:
            async with aiofiles.open(self.path, 'r', encoding='utf-8', errors='replace') as file:
                self._parsed = True
                Text = await file.read()
        except OSError:
            return 0

        Now = int(time.time()) if now is None else now
        Elapsed, Spots = self.parse_snapshot(Text, Now)

        return store.restore_from_persistence(Spots, Elapsed)
