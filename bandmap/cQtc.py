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
# cQtc.py
#
# QTC bookkeeping for the WAE contest: how many QTCs each station has taken
# and whether it can take more.
#

from __future__ import annotations

from dataclasses import dataclass

@dataclass
class cQtcEntry:
    total:   int = 0
    capable: int = 0
    flag:    str = ''

class cQtcStore:
    MAX_QTCS = 10

    def __init__(self) -> None:
        self._entries: dict[str, cQtcEntry] = {}

    def get(self, call: str) -> cQtcEntry:
        return self._entries.get(call, cQtcEntry())

    def _entry(self, call: str) -> cQtcEntry:
        return self._entries.setdefault(call, cQtcEntry())

    def sent(self, call: str, count: int) -> None:
        self._entry(call).total += count

    def set_capable(self, call: str, count: int = 1) -> None:
        self._entry(call).capable = count

    def set_flag(self, call: str, flag: str) -> None:
        self._entry(call).flag = flag[:1]

    def keeps_worked_station_active(self, call: str) -> bool:
        """A worked station still worth calling because QTCs can be exchanged with it."""
        entry = self.get(call)

        if 0 < entry.total < self.MAX_QTCS:
            return True

        return entry.total == 0 and entry.capable > 0

    def format_call(self, call: str, width: int) -> str:
        entry = self.get(call)

        if entry.total <= 0 and not entry.flag:
            return truncate(call, width)

        return f'{truncate(call, width - 2)} {entry.flag}'.rstrip()

def truncate(text: str, width: int) -> str:
    """Cut text to width characters, marking a cut with '..'."""
    if len(text) > width:
        return text[:width - 2] + '..'

    return text
