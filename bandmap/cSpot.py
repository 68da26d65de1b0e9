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
# cSpot.py
#
# The spot record held by the bandmap store and copied into filtered views.
#

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final, Literal

# Spots closer than this (in Hz) are treated as the same signal.
TOLERANCE_HZ: Final[int] = 100

class cMode:
    CW:   Final[int] = 0
    SSB:  Final[int] = 1
    DIGI: Final[int] = 2

    NAMES: Final[dict[int, str]] = {
        CW:   'CW',
        SSB:  'SSB',
        DIGI: 'DIGI',
    }

    @classmethod
    def from_name(cls, name: str) -> int | None:
        return next((Code for Code, Name in cls.NAMES.items() if Name == name.upper()), None)

@dataclass
class cSpot:
    call:          str
    frequency:     int
    mode:          int
    band:          int
    node:          str  = ' '
    ttl:           int  = 0
    dupe:          bool = False
    cq_zone:       int  = 0
    country_index: int  = 0
    prefix:        str  = ''

    def copy(self) -> cSpot:
        return replace(self)

    def age_class(self, lifetime: int) -> Literal['NEW', 'NORMAL', 'OLD']:
        """NEW for the first 5% of the lifetime, OLD for the last two thirds."""
        if self.ttl > (lifetime * 95) // 100:
            return 'NEW'

        if self.ttl > (lifetime * 2) // 3:
            return 'NORMAL'

        return 'OLD'

    def distance(self, frequency: int) -> int:
        return abs(self.frequency - frequency)
