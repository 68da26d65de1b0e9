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
# cWindow.py
#
# Picks the slice of the filtered view that fits on screen, keeping the
# operator's frequency in the middle when there are spots on both sides.
#

from __future__ import annotations

import bisect
from collections.abc import Sequence
from dataclasses import dataclass

from .cSpot import TOLERANCE_HZ, cSpot

@dataclass(frozen=True)
class cWindowRange:
    start:       int
    below:       int
    on_center:   int
    stop:        int
    show_center: bool

    @property
    def below_range(self) -> range:
        return range(self.start, self.below)

    @property
    def above_range(self) -> range:
        return range(self.below + self.on_center, self.stop)

    @property
    def rows_used(self) -> int:
        return len(self.below_range) + (1 if self.show_center else 0) + len(self.above_range)

class cWindow:
    @staticmethod
    def select(view: Sequence[cSpot], center: int, capacity: int, have_center: bool = True) -> cWindowRange:
        """
        Choose [start, stop) of view for a display of capacity cells.

        Each side of the center gets half of the cells. A side with fewer spots
        than that hands its unused cells to the other side. Without a live
        center frequency no center row is drawn and its cell goes to the spots.
        """
        Total = len(view)

        if capacity <= 0:
            return cWindowRange(0, 0, 0, 0, False)

        Below = bisect.bisect_right(view, center - TOLERANCE_HZ, key=lambda Spot: Spot.frequency)
        OnCenter = 1 if Below < Total and view[Below].frequency <= center + TOLERANCE_HZ else 0
        Above = Total - Below - OnCenter

        if Above < (capacity - 1) // 2:
            MaxBelow = capacity - Above - 1
        else:
            MaxBelow = capacity // 2

        Start = Below - MaxBelow if Below > MaxBelow else 0
        Stop  = min(Total, Start + capacity - (1 - OnCenter))

        if not have_center:
            if OnCenter:
                OnCenter = 0
            else:
                Stop = min(Total, Stop + 1)

        return cWindowRange(Start, Below, OnCenter, Stop, have_center)
