# type: ignore reportConstantRedefinition
from __future__ import annotations

import sys


def supports_unicode() -> bool:
    try:
        "✅".encode(sys.stdout.encoding or "ascii")
        return True
    except UnicodeEncodeError:
        return False


SUPPORTS_UNICODE = supports_unicode()


### Icons which depend on Unicode support
if SUPPORTS_UNICODE:
    SUCCESS = "✅"
    FAIL = "❌"
else:
    SUCCESS = "[OK]"
    FAIL = "[FAIL]"
