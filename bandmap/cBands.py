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
# cBands.py
#
# Band and mode classification of spot frequencies (all values in Hz).
#

from __future__ import annotations

from typing import ClassVar, Final

from .cSpot import cMode

class cBands:
    # Spots above this are never taken into the bandmap.
    HF_LIMIT_HZ: Final[int] = 30_000_000

    # band: (lower edge, upper edge, CW corner, SSB corner)
    _corners_hz: ClassVar[dict[int, tuple[int, int, int, int]]] = {
        160: ( 1_800_000,  2_000_000,  1_838_000,  1_840_000),
        80:  ( 3_500_000,  4_000_000,  3_580_000,  3_600_000),
        60:  ( 5_250_000,  5_450_000,  5_354_000,  5_354_000),
        40:  ( 7_000_000,  7_300_000,  7_040_000,  7_040_000),
        30:  (10_100_000, 10_150_000, 10_140_000, 10_150_000),
        20:  (14_000_000, 14_350_000, 14_070_000, 14_100_000),
        17:  (18_068_000, 18_168_000, 18_095_000, 18_120_000),
        15:  (21_000_000, 21_450_000, 21_070_000, 21_150_000),
        12:  (24_890_000, 24_990_000, 24_915_000, 24_930_000),
        10:  (28_000_000, 29_700_000, 28_070_000, 28_300_000),
    }

    _warc_bands: ClassVar[frozenset[int]] = frozenset({60, 30, 17, 12})

    @classmethod
    def bands(cls) -> list[int]:
        return list(cls._corners_hz)

    @classmethod
    def which_band(cls, frequency: int) -> int | None:
        if frequency > cls.HF_LIMIT_HZ:
            return None

        return next(
            (Band for Band, (Lower, Upper, _, _) in cls._corners_hz.items()
            if Lower <= frequency <= Upper),
            None
        )

    @classmethod
    def freq_to_mode(cls, frequency: int, band: int) -> int:
        _, _, CwCorner, SsbCorner = cls._corners_hz[band]

        if frequency <= CwCorner:
            return cMode.CW

        if frequency < SsbCorner:
            return cMode.DIGI

        return cMode.SSB

    @classmethod
    def is_warc(cls, band: int) -> bool:
        return band in cls._warc_bands

    @classmethod
    def center_frequency(cls, band: int, mode: int) -> int:
        """Middle of the band segment used by the given mode."""
        Lower, Upper, CwCorner, SsbCorner = cls._corners_hz[band]

        if mode == cMode.CW:
            return (Lower + CwCorner) // 2

        if mode == cMode.SSB:
            return (SsbCorner + Upper) // 2

        return (CwCorner + SsbCorner) // 2
