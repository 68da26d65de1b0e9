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

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Literal, get_args

import aiofiles

from .cBands import cBands
from .cCommon import cCommon
from .cSpot import cMode

class cConfig:
    CONFIG_FILE: ClassVar[str] = 'bandmap.cfg'

    @dataclass
    class cBandmap:
        ALL_BANDS:  bool = True
        ALL_MODES:  bool = True
        SHOW_DUPES: bool = True
        SKIP_DUPES: bool = True
        LIFETIME:   int  = 900
        ONLY_MULTS: bool = False

        TOGGLE_KEYS: ClassVar[dict[str, str]] = {
            'B': 'ALL_BANDS',
            'M': 'ALL_MODES',
            'D': 'SHOW_DUPES',
            'O': 'ONLY_MULTS',
        }

        def toggle(self, key: str) -> bool:
            """Flip the filter bound to a menu key. Returns False for unknown keys."""
            if (Attribute := self.TOGGLE_KEYS.get(key.upper())) is None:
                return False

            setattr(self, Attribute, not getattr(self, Attribute))
            return True
    @classmethod
    def init_bandmap(cls) -> None:
        bandmap_config = cls.config_file.get("BANDMAP", {})
        lifetime = int(bandmap_config.get("LIFETIME", cConfig.cBandmap.LIFETIME))

        if lifetime <= 0:
            print(f"Invalid BANDMAP LIFETIME: {lifetime}. Using {cConfig.cBandmap.LIFETIME}.")
            lifetime = cConfig.cBandmap.LIFETIME

        cls.BANDMAP = cConfig.cBandmap(
            ALL_BANDS  = bool(bandmap_config.get("ALL_BANDS",  cConfig.cBandmap.ALL_BANDS)),
            ALL_MODES  = bool(bandmap_config.get("ALL_MODES",  cConfig.cBandmap.ALL_MODES)),
            SHOW_DUPES = bool(bandmap_config.get("SHOW_DUPES", cConfig.cBandmap.SHOW_DUPES)),
            SKIP_DUPES = bool(bandmap_config.get("SKIP_DUPES", cConfig.cBandmap.SKIP_DUPES)),
            LIFETIME   = lifetime,
            ONLY_MULTS = bool(bandmap_config.get("ONLY_MULTS", cConfig.cBandmap.ONLY_MULTS)),
        )

    @dataclass
    class cLogFile:
        FILE_NAME:         str | None = None
        ENABLED:           bool = False
        DELETE_ON_STARTUP: bool = False
    @classmethod
    def init_logfile(cls) -> None:
        log_file_config = cls.config_file.get("LOG_FILE", {})
        cls.LOG_FILE = cConfig.cLogFile(
            ENABLED           = bool(log_file_config.get("ENABLED", cConfig.cLogFile.ENABLED)),
            FILE_NAME         = log_file_config.get("FILE_NAME", cConfig.cLogFile.FILE_NAME),
            DELETE_ON_STARTUP = bool(log_file_config.get("DELETE_ON_STARTUP", cConfig.cLogFile.DELETE_ON_STARTUP))
        )

    @dataclass
    class cScreen:
        ROWS:            int   = 10
        COLUMNS:         int   = 3
        REFRESH_SECONDS: float = 2

        @property
        def capacity(self) -> int:
            return self.ROWS * self.COLUMNS
    @classmethod
    def init_screen(cls) -> None:
        screen_config = cls.config_file.get("SCREEN", {})
        cls.SCREEN = cConfig.cScreen(
            ROWS            = max(int(screen_config.get("ROWS",    cConfig.cScreen.ROWS)), 1),
            COLUMNS         = max(int(screen_config.get("COLUMNS", cConfig.cScreen.COLUMNS)), 1),
            REFRESH_SECONDS = float(screen_config.get("REFRESH_SECONDS", cConfig.cScreen.REFRESH_SECONDS)),
        )

    t_contest    = Literal['GENERAL', 'CQWW', 'WAE']
    t_multiplier = Literal['country', 'zone', 'both']

    CONTEST:               t_contest
    CONTEST_MODE:          bool
    MULTIPLIER:            t_multiplier
    BAND:                  int
    MODE:                  int
    CENTER_FREQUENCY:      int | None
    MY_NODE:               str
    ADI_FILE:              str
    CTY_FILE:              str
    INITIAL_EXCHANGE_FILE: str
    BMDATA_FILE:           str
    SAVE_SECONDS:          int
    MINITEST_SECONDS:      int
    VERBOSE:               bool = False
    LOG_BAD_SPOTS:         bool = False

    BANDMAP:  cBandmap = cBandmap()
    LOG_FILE: cLogFile = cLogFile()
    SCREEN:   cScreen  = cScreen()

    config_file: dict[str, Any]

    @classmethod
    async def init(cls, argv_v: list[str]) -> None:
        async def read_bandmap_cfg_async() -> dict[str, Any]:
            config_vars: dict[str, Any] = {}

            ConfigFileAbsolute = Path(cls.CONFIG_FILE).resolve()
            print(f"Reading {cls.CONFIG_FILE} from '{ConfigFileAbsolute}'...")

            try:
                async with aiofiles.open(ConfigFileAbsolute, 'r', encoding='utf-8') as config_file:
                    ConfigFileString = await config_file.read()
                    exec(ConfigFileString, {}, config_vars)
            except OSError:
                print(f"Unable to open configuration file '{cls.CONFIG_FILE}'.")
                cCommon.delayed_exit()

            return config_vars

        cls.config_file = await read_bandmap_cfg_async()

        cls.CONTEST               = cls.config_file.get('CONTEST', 'GENERAL').upper()
        cls.CONTEST_MODE          = bool(cls.config_file.get('CONTEST_MODE', True))
        cls.MULTIPLIER            = cls.config_file.get('MULTIPLIER', 'country')
        cls.BAND                  = int(cls.config_file.get('BAND', 20))
        cls.MODE                  = cMode.from_name(cls.config_file.get('MODE', 'CW')) or cMode.CW
        cls.CENTER_FREQUENCY      = cls.khz_to_hz(cls.config_file.get('RIG_FREQUENCY'))
        cls.MY_NODE               = str(cls.config_file.get('MY_NODE', 'A'))[:1] or ' '
        cls.ADI_FILE              = cls.config_file.get('ADI_FILE', '')
        cls.CTY_FILE              = cls.config_file.get('CTY_FILE', 'cty.dat')
        cls.INITIAL_EXCHANGE_FILE = cls.config_file.get('INITIAL_EXCHANGE_FILE', '')
        cls.BMDATA_FILE           = cls.config_file.get('BMDATA_FILE', '.bmdata.dat')
        cls.SAVE_SECONDS          = int(cls.config_file.get('SAVE_SECONDS', 60))
        cls.MINITEST_SECONDS      = int(cls.config_file.get('MINITEST_SECONDS', 0))
        cls.VERBOSE               = bool(cls.config_file.get('VERBOSE', False))
        cls.LOG_BAD_SPOTS         = bool(cls.config_file.get('LOG_BAD_SPOTS', False))

        cls.init_bandmap()
        cls.init_logfile()
        cls.init_screen()

        cls._parse_args(argv_v)
        cls._validate_config()

    @staticmethod
    def khz_to_hz(value: Any) -> int | None:
        if value is None or value == '':
            return None

        return round(float(value) * 1000)

    @classmethod
    def _parse_args(cls, arg_v: list[str]) -> None:
        parser = argparse.ArgumentParser(description="Bandmap Skimmer Configuration")

        parser.add_argument("-a", "--adi", type=str, help="ADI file of worked stations")
        parser.add_argument("-b", "--band", type=int, help="Current band in metres")
        parser.add_argument("-c", "--contest", type=str, choices=get_args(cConfig.t_contest), help="Contest type")
        parser.add_argument("-f", "--frequency", type=float, help="Rig frequency in kHz (center of the bandmap)")
        parser.add_argument("-l", "--logfile", type=str, help="Logfile name")
        parser.add_argument("-m", "--mode", type=str, choices=list(cMode.NAMES.values()), help="Current mode")
        parser.add_argument("-n", "--node", type=str, help="Node id of this logging instance")
        parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose mode")

        args = parser.parse_args(arg_v)

        if args.verbose:
            cls.VERBOSE = True
        if args.adi:
            cls.ADI_FILE = args.adi
        if args.band:
            cls.BAND = args.band
        if args.contest:
            cls.CONTEST = args.contest
        if args.frequency:
            cls.CENTER_FREQUENCY = cls.khz_to_hz(args.frequency)
        if args.logfile:
            cls.LOG_FILE.ENABLED = True
            cls.LOG_FILE.DELETE_ON_STARTUP = True
            cls.LOG_FILE.FILE_NAME = args.logfile
        if args.mode:
            cls.MODE = cMode.from_name(args.mode) or cMode.CW
        if args.node:
            cls.MY_NODE = args.node[:1]

    @classmethod
    def _validate_config(cls) -> None:
        if cls.CONTEST not in get_args(cConfig.t_contest):
            print(f"CONTEST must be one of {get_args(cConfig.t_contest)}.")
            cCommon.delayed_exit()

        if cls.MULTIPLIER not in get_args(cConfig.t_multiplier):
            print(f"Invalid MULTIPLIER: {cls.MULTIPLIER}. Must be one of {get_args(cConfig.t_multiplier)}.")
            cls.MULTIPLIER = 'country'

        if cls.BAND not in cBands.bands():
            print(f"BAND must be one of {cBands.bands()}.")
            cCommon.delayed_exit()

        if cls.SAVE_SECONDS <= 0:
            print("SAVE_SECONDS must be a positive number of seconds.")
            cCommon.delayed_exit()

        if cls.MINITEST_SECONDS < 0:
            print("MINITEST_SECONDS must be 0 (disabled) or a positive number of seconds.")
            cCommon.delayed_exit()
