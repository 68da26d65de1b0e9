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
# cCountry.py
#
# Country and CQ zone lookup backed by a cty.dat country file
# (https://www.country-files.com/).
#

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Protocol

import aiofiles
import aiofiles.os
import aiohttp
from aiohttp import ClientTimeout

CTY_URL = 'https://www.country-files.com/cty/cty.dat'

@dataclass(frozen=True)
class cCountry:
    name:      str
    cq_zone:   int
    itu_zone:  int
    continent: str
    prefix:    str

class cCountryLookup(Protocol):
    def country_index(self, call: str) -> int | None: ...
    def country(self, index: int) -> cCountry: ...

class cCountryFile:
    _override_regex:   ClassVar[re.Pattern[str]] = re.compile(r'\(\d+\)|\[\d+\]|<[^>]*>|\{[^}]*\}|~[^~]*~')
    _ignored_suffixes: ClassVar[frozenset[str]]  = frozenset({'P', 'M', 'MM', 'AM', 'QRP', 'A', 'B'})

    def __init__(self) -> None:
        self.countries: list[cCountry] = []
        self._prefixes: dict[str, int] = {}
        self._calls:    dict[str, int] = {}

    def __len__(self) -> int:
        return len(self.countries)

    def load(self, text: str) -> None:
        self.countries = []
        self._prefixes = {}
        self._calls    = {}

        for record in text.replace('\r', '').replace('\n', ' ').split(';'):
            fields = record.split(':')

            if len(fields) < 9:
                continue

            try:
                country = cCountry(
                    name      = fields[0].strip(),
                    cq_zone   = int(fields[1]),
                    itu_zone  = int(fields[2]),
                    continent = fields[3].strip(),
                    prefix    = fields[7].strip().lstrip('*'),
                )
            except ValueError:
                continue

            self.countries.append(country)
            index = len(self.countries)

            self._prefixes.setdefault(country.prefix, index)

            for alias in fields[8].split(','):
                alias = self._override_regex.sub('', alias).strip()

                if not alias:
                    continue

                if alias.startswith('='):
                    self._calls[alias[1:]] = index
                else:
                    self._prefixes[alias] = index

    async def read_async(self, path: str) -> bool:
        try:
            async with aiofiles.open(path, 'rb') as file:
                raw = await file.read()
        except OSError as e:
            print(f"Unable to read country file '{path}': {e}")
            return False

        self.load(raw.decode('latin-1'))
        return True

    @staticmethod
    async def download_async(path: str, url: str = CTY_URL) -> bool:
        if await aiofiles.os.path.exists(path):
            return True

        print(f"Downloading '{url}'...")

        try:
            async with aiohttp.ClientSession(timeout=ClientTimeout(total=30)) as session:
                async with session.get(url) as response:
                    if response.status != 200:
                        print(f"Unable to download country file: HTTP {response.status}.")
                        return False

                    content = await response.read()
        except (aiohttp.ClientError, TimeoutError) as e:
            print(f"Problem downloading country file: {e}.")
            return False

        async with aiofiles.open(path, 'wb') as file:
            await file.write(content)

        return True

    def _base_call(self, call: str) -> str:
        parts = [part for part in call.split('/') if part and part not in self._ignored_suffixes and not part.isdigit()]

        if not parts:
            return call

        # DL/W1ABC or W1ABC/DL: the shorter part is the operating prefix
        return min(parts, key=len)

    def country_index(self, call: str) -> int | None:
        call = call.upper()

        if call in self._calls:
            return self._calls[call]

        base = self._base_call(call)

        for length in range(len(base), 0, -1):
            if (index := self._prefixes.get(base[:length])) is not None:
                return index

        return None

    def country(self, index: int) -> cCountry:
        return self.countries[index - 1]
