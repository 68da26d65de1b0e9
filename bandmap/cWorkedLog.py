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
# cWorkedLog.py
#
# Stations already worked, read from the operator's ADIF log, plus the
# exchanges known in advance from an initial exchange file.
#

from __future__ import annotations

import asyncio
import calendar
import re
import time
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Protocol

import aiofiles

from .cBands import cBands
from .cCommon import cCommon
from .cCountry import cCountryLookup

class cWorkedLookup(Protocol):
    def lookup(self, call: str) -> cWorkedEntry | None: ...
    def worked_on_band(self, entry: cWorkedEntry, band: int) -> bool: ...
    def worked_in_current_period(self, entry: cWorkedEntry, band: int) -> bool: ...

@dataclass
class cWorkedEntry:
    call:          str
    exchange:      str = ''
    country_index: int = 0
    cq_zone:       int = 0
    last_qso:      dict[int, float] = field(default_factory=dict)  # band: epoch seconds

    @property
    def bands(self) -> set[int]:
        return set(self.last_qso)

class cWorkedLog:
    _EOH_PATTERN   = re.compile(r'<eoh>', re.IGNORECASE)
    _EOR_PATTERN   = re.compile(r'<eor>', re.IGNORECASE)
    _FIELD_PATTERN = re.compile(r'<(\w+?):\d+(?::.*?)*>(.*?)\s*(?=<(?:\w+?):\d+(?::.*?)*>|$)', re.IGNORECASE | re.DOTALL)
    _BAND_PATTERN  = re.compile(r'^(\d+)M$')

    _EXCHANGE_FIELDS: ClassVar[tuple[str, ...]] = ('SRX_STRING', 'SRX', 'CQZ')

    def __init__(self, minitest_seconds: int = 0, country_lookup: cCountryLookup | None = None) -> None:
        self.minitest_seconds = minitest_seconds
        self.country_lookup   = country_lookup
        self.read_timestamp: float | None = None
        self.generation = 0

        # call -> entry; replaced as a whole on every load, entries are never changed afterwards
        self._data: dict[str, cWorkedEntry] = {}

    def __len__(self) -> int:
        return len(self._data)

    @classmethod
    def parse_adi_generator(cls, content: str) -> Iterator[tuple[str, int, float, str, str]]:
        """(call, band, qso epoch, exchange, cq zone field) for every usable record."""
        parts = cls._EOH_PATTERN.split(content, maxsplit=1)
        body = parts[1].strip() if len(parts) > 1 else content

        for record_text in filter(None, map(str.strip, cls._EOR_PATTERN.split(body))):
            fields = {k.upper(): v.strip() for k, v in cls._FIELD_PATTERN.findall(record_text)}

            if 'TIME_OFF' in fields and 'TIME_ON' not in fields:
                fields['TIME_ON'] = fields['TIME_OFF']

            if not all(k in fields for k in ('CALL', 'QSO_DATE', 'TIME_ON')):
                continue

            if (band := cls._band_of(fields)) is None:
                continue

            exchange = next((fields[k] for k in cls._EXCHANGE_FIELDS if fields.get(k)), '')

            yield (
                fields['CALL'].upper(),
                band,
                cls._epoch_of(fields['QSO_DATE'], fields['TIME_ON']),
                exchange,
                fields.get('CQZ', ''),
            )

    @classmethod
    def _band_of(cls, fields: dict[str, str]) -> int | None:
        if match := cls._BAND_PATTERN.match(fields.get('BAND', '').upper()):
            band = int(match.group(1))
            if band in cBands.bands():
                return band

        if freq_str := fields.get('FREQ', ''):
            with suppress(ValueError):
                return cBands.which_band(round(float(freq_str) * 1_000_000))

        return None

    @staticmethod
    def _epoch_of(date: str, time_on: str) -> float:
        try:
            return float(calendar.timegm(time.strptime(date + time_on.ljust(6, '0')[:6], '%Y%m%d%H%M%S')))
        except ValueError:
            return 0.0

    def load(self, content: str) -> None:
        entries: dict[str, cWorkedEntry] = {}

        for call, band, epoch, exchange, cq_zone in self.parse_adi_generator(content):
            if call not in entries:
                entries[call] = self._new_entry(call)

            entry = entries[call]
            entry.last_qso[band] = max(epoch, entry.last_qso.get(band, 0.0))

            if exchange:
                entry.exchange = exchange

            if cq_zone and (zone := cCommon.atoi(cq_zone)) > 0:
                entry.cq_zone = zone

        self._data = entries
        self.generation += 1

    def _new_entry(self, call: str) -> cWorkedEntry:
        entry = cWorkedEntry(call=call)

        if self.country_lookup is not None and (country_index := self.country_lookup.country_index(call)):
            entry.country_index = country_index
            entry.cq_zone       = self.country_lookup.country(country_index).cq_zone

        return entry

    async def read_async(self, path: str) -> bool:
        AdiFileAbsolute = Path(path).resolve()

        try:
            self.read_timestamp = AdiFileAbsolute.stat().st_mtime

            async with aiofiles.open(AdiFileAbsolute, 'rb') as file:
                content = (await file.read()).decode('utf-8', 'ignore')
        except OSError as e:
            print(f"Error reading ADIF file '{AdiFileAbsolute}': {e}")
            return False

        loop = asyncio.get_running_loop()
        with ThreadPoolExecutor(max_workers=1) as executor:
            await loop.run_in_executor(executor, self.load, content)

        return True

    def lookup(self, call: str) -> cWorkedEntry | None:
        """
        Entry for call from the log as currently loaded.

        The entry stays valid after a reload; it keeps answering for the log
        it was taken from.
        """
        return self._data.get(call)

    def entries(self) -> list[cWorkedEntry]:
        return list(self._data.values())

    @staticmethod
    def worked_on_band(entry: cWorkedEntry, band: int) -> bool:
        return band in entry.last_qso

    def worked_in_current_period(self, entry: cWorkedEntry, band: int, now: float | None = None) -> bool:
        if self.minitest_seconds <= 0:
            return True

        Now = time.time() if now is None else now
        PeriodStart = Now - (Now % self.minitest_seconds)

        return entry.last_qso.get(band, 0.0) >= PeriodStart

    def exchange(self, call: str) -> str:
        entry = self.lookup(call)
        return entry.exchange if entry is not None else ''

class cInitialExchange:
    """CALL,EXCHANGE lines; '#' starts a comment line."""

    def __init__(self) -> None:
        self.exchanges: dict[str, str] = {}

    def load(self, text: str) -> None:
        self.exchanges = {}

        for line in text.splitlines():
            line = line.strip()

            if not line or line.startswith('#') or ',' not in line:
                continue

            call, exchange = line.split(',', 1)

            if call.strip():
                self.exchanges[call.strip().upper()] = exchange.strip()

    async def read_async(self, path: str) -> bool:
        try:
            async with aiofiles.open(path, 'r', encoding='utf-8', errors='replace') as file:
                self.load(await file.read())
        except OSError as e:
            print(f"Unable to read initial exchange file '{path}': {e}")
            return False

        return True

    def get(self, call: str) -> str | None:
        return self.exchanges.get(call)

class cZoneExchange:
    """Exchange received from a station, preferring the log over the initial exchange list."""

    def __init__(self, worked_log: cWorkedLog, initial_exchange: cInitialExchange | None = None) -> None:
        self.worked_log       = worked_log
        self.initial_exchange = initial_exchange

    def __call__(self, call: str) -> str | None:
        if exchange := self.worked_log.exchange(call):
            return exchange

        if self.initial_exchange is not None:
            return self.initial_exchange.get(call)

        return None
