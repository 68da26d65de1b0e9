from __future__ import annotations

import re
import sys
import time
from typing import NoReturn

class cCommon:
    @staticmethod
    def atoi(text: str) -> int:
        """Leading integer of text, 0 when there is none."""
        match = re.match(r'\s*([+-]?\d+)', text)
        return int(match.group(1)) if match else 0

    @staticmethod
    def delayed_exit(exit_code: int = 1) -> NoReturn:
        """Exit with a 10-second delay to allow Windows Explorer users to read error messages."""
        print()
        try:
            for i in range(10, 0, -1):
                print(f"\rProgram will close in {i} seconds...", end='', flush=True)
                time.sleep(1)
            print()
        except KeyboardInterrupt:
            print("\n\nExiting...")
        sys.exit(exit_code)
