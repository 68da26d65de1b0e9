#!/usr/bin/python3
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
# bandmap_skimmer.py
#
# A contest bandmap fed from DX cluster spots. Cluster lines are read from
# standard input, for example:
#
#     telnet dxc.example.net 7300 | python3 bandmap_skimmer.py
#
# Spots age out after a configurable lifetime, stations already worked are
# marked as dupes, and the spots around the rig frequency are redrawn every
# few seconds. The bandmap is saved on exit and restored on the next start.
#

import asyncio
import platform
import signal
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import ClassVar, NoReturn

import aiofiles.os

from bandmap.cBandmapDisplay import cBandmapDisplay
from bandmap.cBands import cBands
from bandmap.cBmData import cBmData
from bandmap.cCluster import cCluster
from bandmap.cConfig import cConfig
from bandmap.cCountry import cCountryFile
from bandmap.cFilterView import cFilterView
from bandmap.cMultiplier import cDupeCheck, cMultiplier
from bandmap.cQtc import cQtcStore
from bandmap.cSpot import cMode
from bandmap.cSpotStore import cSpotStore
from bandmap.cUtil import cDisplay
from bandmap.cWindow import cWindow
from bandmap.cWorkedLog import cInitialExchange, cWorkedLog, cZoneExchange

class cBandmap:
    store:       ClassVar[cSpotStore]
    bm_data:     ClassVar[cBmData]
    worked_log:  ClassVar[cWorkedLog]
    filter_view: ClassVar[cFilterView]
    display:     ClassVar[cBandmapDisplay]

    _last_screen: ClassVar[list[str]] = []

    @classmethod
    async def initialize_async(cls) -> None:
        Countries = cCountryFile()

        if await cCountryFile.download_async(cConfig.CTY_FILE):
            await Countries.read_async(cConfig.CTY_FILE)

        print(f'  {len(Countries)} countries loaded.')

        cls.worked_log = cWorkedLog(cConfig.MINITEST_SECONDS, Countries)

        if cConfig.ADI_FILE:
            cDisplay.print(f"Reading QSOs from '{Path(cConfig.ADI_FILE).resolve()}'...")
            await cls.worked_log.read_async(cConfig.ADI_FILE)
            print(f'  {len(cls.worked_log)} stations worked.')

        ZoneExchange = None

        if cConfig.CONTEST == 'CQWW':
            InitialExchange = cInitialExchange()

            if cConfig.INITIAL_EXCHANGE_FILE:
                await InitialExchange.read_async(cConfig.INITIAL_EXCHANGE_FILE)

            ZoneExchange = cZoneExchange(cls.worked_log, InitialExchange)

        Qtc = cQtcStore() if cConfig.CONTEST == 'WAE' else None

        cls.store = cSpotStore(cConfig.BANDMAP, Countries, ZoneExchange)
        cls.bm_data = cBmData(cConfig.BMDATA_FILE)

        Restored = await cls.bm_data.load_async(cls.store)
        print(f'  {Restored} spots restored from {cConfig.BMDATA_FILE}.')

        cls.filter_view = cFilterView(
            cDupeCheck(cls.worked_log, Qtc),
            cMultiplier.check_for(cConfig.CONTEST, cls.worked_log, cConfig.MULTIPLIER),
        )
        cls.display = cBandmapDisplay(cls.filter_view, cConfig.BANDMAP, cConfig.SCREEN, cConfig.MY_NODE, Qtc)

    @classmethod
    def center(cls) -> tuple[int, bool]:
        """Rig frequency if there is one, otherwise the middle of the current band segment."""
        if cConfig.CENTER_FREQUENCY is not None:
            return cConfig.CENTER_FREQUENCY, True

        return cBands.center_frequency(cConfig.BAND, cConfig.MODE), False

    @classmethod
    def render_once(cls) -> list[str]:
        View = cls.filter_view.build(cls.store, cConfig.BANDMAP, cConfig.BAND, cConfig.MODE, cConfig.CONTEST_MODE)
        Center, HaveCenter = cls.center()
        Window = cWindow.select(View, Center, cConfig.SCREEN.capacity, HaveCenter)

        return cls.display.render(View, Window, Center)

    @classmethod
    async def handle_spots_task(cls) -> None:
        async for line in cCluster.feed_generator(sys.stdin):
            try:
                await cCluster.handle_line_async(cls.store, line)
            except Exception as e:
                # Don't let processing errors crash the whole task
                print(f"Error processing spot: {e}")
                continue

        cDisplay.print('End of cluster input.')

    @classmethod
    async def aging_task(cls) -> NoReturn:
        while True:
            await asyncio.sleep(1)
            cls.store.age_tick()

    @classmethod
    async def render_task(cls) -> NoReturn:
        loop = asyncio.get_running_loop()

        with ThreadPoolExecutor(max_workers=1) as executor:
            while True:
                try:
                    Screen = await loop.run_in_executor(executor, cls.render_once)

                    if Screen != cls._last_screen:
                        print()
                        print(f'{cls.center()[0] / 1000:.1f} kHz  {cConfig.BAND}m {cMode.NAMES[cConfig.MODE]}')
                        for Line in Screen:
                            print(Line)
                        cls._last_screen = Screen
                except Exception as e:
                    print(f"Error drawing bandmap: {e}")

                await asyncio.sleep(cConfig.SCREEN.REFRESH_SECONDS)

    @classmethod
    async def save_task(cls) -> NoReturn:
        while True:
            await asyncio.sleep(cConfig.SAVE_SECONDS)
            await cls.bm_data.save_async(cls.store)

    @classmethod
    async def watch_logfile_task(cls) -> NoReturn:
        while True:
            try:
                if await aiofiles.os.path.exists(cConfig.ADI_FILE) and Path(cConfig.ADI_FILE).stat().st_mtime != cls.worked_log.read_timestamp:
                    cDisplay.print(f"'{cConfig.ADI_FILE}' file is changing. Waiting for write to finish...")

                    # Wait until file size stabilizes
                    while True:
                        Size = Path(cConfig.ADI_FILE).stat().st_size
                        await asyncio.sleep(1)
                        if Path(cConfig.ADI_FILE).stat().st_size == Size:
                            break

                    await cls.worked_log.read_async(cConfig.ADI_FILE)

            except FileNotFoundError:
                print(f"Warning: ADI file '{cConfig.ADI_FILE}' not found or inaccessible")
            except Exception as e:
                print(f"Error watching log file: {e}")

            await asyncio.sleep(3)

async def main_loop() -> None:
    print('Bandmap Skimmer\n')

    if platform.system() != "Windows":
        main_task = asyncio.current_task()
        if main_task is not None:
            asyncio.get_running_loop().add_signal_handler(signal.SIGTERM, main_task.cancel)

    await cConfig.init(sys.argv[1:])

    # Clear log file if needed
    if cConfig.LOG_FILE.DELETE_ON_STARTUP:
        Filename = cConfig.LOG_FILE.FILE_NAME
        if Filename is not None and await aiofiles.os.path.exists(Filename):
            Path(Filename).unlink()

    await cBandmap.initialize_async()

    print()
    print('Running...')
    print()

    tasks: list[asyncio.Task[None]] = [
        asyncio.create_task(cBandmap.handle_spots_task()),
        asyncio.create_task(cBandmap.aging_task()),
        asyncio.create_task(cBandmap.render_task()),
        asyncio.create_task(cBandmap.save_task()),
    ]

    if cConfig.ADI_FILE:
        tasks.append(asyncio.create_task(cBandmap.watch_logfile_task()))

    try:
        await asyncio.gather(*tasks)
    finally:
        for task in tasks:
            task.cancel()

        if await cBandmap.bm_data.save_async(cBandmap.store):
            print(f'\nBandmap saved to {cConfig.BMDATA_FILE}.')

def run() -> None:
    try:
        asyncio.run(main_loop())
    except (KeyboardInterrupt, asyncio.CancelledError):
        print("\n\nExiting...")
        sys.stdout.flush()

if __name__ == "__main__":
    run()
