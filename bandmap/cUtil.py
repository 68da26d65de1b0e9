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

from typing import ClassVar

import aiofiles

from .cConfig import cConfig

class cDisplay:
    last_status: ClassVar[str | None] = None

    @staticmethod
    def print(text: str) -> None:
        print(text)

    @classmethod
    def status(cls, text: str) -> None:
        """Operational status line, remembered until the next one."""
        cls.last_status = text
        cls.print(text)

class cUtil:
    BAD_SPOTS_FILE: ClassVar[str] = 'Bad_Cluster_Spots.log'

    @staticmethod
    async def log_async(line: str) -> None:
        if cConfig.LOG_FILE.ENABLED and cConfig.LOG_FILE.FILE_NAME is not None:
            async with aiofiles.open(cConfig.LOG_FILE.FILE_NAME, 'a', encoding='utf-8') as file:
                await file.write(line + '\n')

    @staticmethod
    async def log_error_async(line: str) -> None:
        if cConfig.LOG_BAD_SPOTS:
            async with aiofiles.open(cUtil.BAD_SPOTS_FILE, 'a', encoding='utf-8') as file:
                await file.write(line + '\n')
