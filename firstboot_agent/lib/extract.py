from __future__ import annotations

import re
from typing import Optional, Pattern, Union


def extract(pattern: Union[str, Pattern[str]], text: Optional[str]) -> Optional[str]:
    """Return the single capture group of the first match, or None.

    Trailing CR/LF is stripped from the value. Text must already be decoded
    from the console code page. Bad patterns and non-text input give None.
    """

    if not isinstance(text, str):
        return None
    try:
        rx = re.compile(pattern) if isinstance(pattern, str) else pattern
        m = rx.search(text)
    except (re.error, TypeError):
        return None

    if m is None or rx.groups != 1:
        return None
    value = m.group(1)
    if value is None:
        return None
    return value.rstrip("\r\n")
