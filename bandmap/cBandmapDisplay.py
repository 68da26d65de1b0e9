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
# cBandmapDisplay.py
#
# Lays the selected window of spots out in columns of text cells.
#

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import ClassVar, Literal

from .cConfig import cConfig
from .cFilterView import cFilterView, tView
from .cQtc import cQtcStore
from .cSpot import cSpot
from .cWindow import cWindowRange

tStyle = Literal['NEW', 'NORMAL', 'OLD', 'DUPE', 'CENTER']

@dataclass(frozen=True)
class cCell:
    text:  str
    style: tStyle

class cBandmapDisplay:
    COLUMN_WIDTH: ClassVar[int] = 22
    CALL_WIDTH:   ClassVar[int] = COLUMN_WIDTH - 7 - 4

    _ansi: ClassVar[dict[str, str]] = {
        'NEW':    '\033[1;36m',
        'NORMAL': '\033[34m',
        'OLD':    '\033[33m',
        'DUPE':   '\033[1;30m',
        'CENTER': '\033[7;32m',
    }
    _reset: ClassVar[str] = '\033[0m'

    def __init__(
        self,
        filter_view: cFilterView,
        config:      cConfig.cBandmap,
        screen:      cConfig.cScreen,
        my_node:     str = ' ',
        qtc:         cQtcStore | None = None,
    ) -> None:
        self.filter_view = filter_view
        self.config      = config
        self.screen      = screen
        self.my_node     = my_node
        self.qtc         = qtc

    def format_call(self, spot: cSpot) -> str:
        if self.qtc is not None:
            Call = self.qtc.format_call(spot.call, self.CALL_WIDTH)
        else:
            Call = spot.call

        # worked stations in small letters
        if spot.dupe and self.config.SHOW_DUPES:
            Call = Call.lower()

        return Call

    def _node_char(self, spot: cSpot) -> str:
        return '*' if spot.node == self.my_node else spot.node

    def spot_cell(self, spot: cSpot) -> cCell:
        Multi = 'M' if self.filter_view.is_multiplier(spot) else ' '
        Text = f'{spot.frequency / 1000:7.1f}{self._node_char(spot)}{Multi} {self.format_call(spot):<12}'

        if spot.dupe and self.config.SHOW_DUPES:
            return cCell(Text, 'DUPE')

        return cCell(Text, spot.age_class(self.config.LIFETIME))

    def center_cell(self, view: tView, window: cWindowRange, center: int) -> cCell:
        if window.on_center:
            Spot = view[window.below]
            Multi = 'M' if self.filter_view.is_multiplier(Spot) else ' '
            return cCell(f'{Spot.frequency / 1000:7.1f}{self._node_char(Spot)}{Multi} {self.format_call(Spot):<12}', 'CENTER')

        return cCell(f'{center / 1000:7.1f}   {"=" * 12}', 'CENTER')

    def cells(self, view: tView, window: cWindowRange, center: int) -> list[cCell]:
        Cells = [self.spot_cell(view[Index]) for Index in window.below_range]

        if window.show_center:
            Cells.append(self.center_cell(view, window, center))

        Cells.extend(self.spot_cell(view[Index]) for Index in window.above_range)

        return Cells[:self.screen.capacity]

    def lines(self, cells: list[cCell], color: bool = False) -> list[str]:
        """Cells fill the first column top to bottom, then the next one."""
        Rows: list[list[str]] = [[] for _ in range(self.screen.ROWS)]

        for Index, Cell in enumerate(cells):
            Text = f'{Cell.text:<{self.COLUMN_WIDTH}}'
            if color:
                Text = f'{self._ansi[Cell.style]}{Text}{self._reset}'
            Rows[Index % self.screen.ROWS].append(Text)

        return [''.join(Row).rstrip() for Row in Rows]

    def info_line(self) -> str:
        return (
            f' bands: {"all" if self.config.ALL_BANDS else "own"}'
            f'  modes: {"all" if self.config.ALL_MODES else "own"}'
            f'  dupes: {"yes" if self.config.SHOW_DUPES else "no"}'
            f'  onl.ml: {"yes" if self.config.ONLY_MULTS else "no"}'
        )

    def render(self, view: tView, window: cWindowRange, center: int, color: bool | None = None) -> list[str]:
        Color = sys.stdout.isatty() if color is None else color
        return self.lines(self.cells(view, window, center), Color) + [self.info_line()]
