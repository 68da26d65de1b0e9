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
# cCluster.py
#
# Turns "DX de" cluster lines into bandmap spots.
#

from __future__ import annotations

import asyncio
import re
from collections.abc import AsyncGenerator
from typing import ClassVar, TextIO

from .cConfig import cConfig
from .cSpotStore import cSpotStore
from .cUtil import cUtil

class cCluster:
    _frequency_regex: ClassVar[re.Pattern[str]] = re.compile(r'\s*(\d+(?:\.\d*)?)')

    CALL_COLUMN:      ClassVar[int] = 26
    FREQUENCY_COLUMN: ClassVar[int] = 16
    NODE_PREFIX:      ClassVar[str] = 'TLF-'

    @classmethod
    def parse_dx_line(cls, line: str) -> tuple[str, int, str] | None:
        """(call, frequency in Hz, reporting node) of a DX spot line, or None."""
        if not line.startswith('DX de '):
            return None

        Tokens = line[cls.CALL_COLUMN:].split()

        if not Tokens:
            return None

        # spots relayed by other logging instances carry their node id after 'TLF-'
        Node = ' '
        if line[6:10] == cls.NODE_PREFIX and len(line) > 10:
            Node = line[10]

        if not (Match := cls._frequency_regex.match(line, cls.FREQUENCY_COLUMN)):
            return None

        return Tokens[0].upper(), round(float(Match.group(1)) * 1000), Node

    @classmethod
    async def handle_line_async(cls, store: cSpotStore, line: str) -> bool:
        if cConfig.VERBOSE:
            print(f'   {line}')

        if (Spot := cls.parse_dx_line(line)) is None:
            await cUtil.log_error_async(line)
            return False

        CallSign, FrequencyHz, Node = Spot
        store.add_or_refresh(CallSign, FrequencyHz, Node)
        await cUtil.log_async(f'{CallSign} {FrequencyHz / 1000:.1f} {Node}')

        return True

    @staticmethod
    async def feed_generator(stream: TextIO) -> AsyncGenerator[str, None]:
        """Lines from a blocking text stream (normally stdin), read in a worker thread."""
        while True:
            Line = await asyncio.to_thread(stream.readline)

            if not Line:
                return

            yield Line.rstrip('\r\n')
