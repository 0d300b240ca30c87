"""
Time keys

Keyframe times are stored as float seconds and serialized as strings such as
"0.1s". Accepted input forms: numbers (seconds), "<n>s", "<n>ms" and bare
numeric strings.
"""
from typing import Union

from tweenprops.application.validation.validation_framework import MalformedObjectError

TimeKey = Union[int, float, str]


def parse_time(key: TimeKey) -> float:
    """
    Convert a time key to seconds.

    Raises:
        MalformedObjectError: If the key is not a number or a parsable string
    """
    if isinstance(key, bool):
        raise MalformedObjectError(f"invalid time key {key!r}", "time")

    if isinstance(key, (int, float)):
        return float(key)

    if isinstance(key, str):
        text = key.strip().lower()
        divisor = 1.0
        if text.endswith("ms"):
            text, divisor = text[:-2], 1000.0
        elif text.endswith("s"):
            text = text[:-1]
        try:
            return float(text) / divisor
        except ValueError:
            pass

    raise MalformedObjectError(f"invalid time key {key!r}", "time")


def format_time(seconds: float) -> str:
    """
    Seconds as a time key string, e.g. 0.1 -> "0.1s", 2.0 -> "2s", 1e-07 -> "1e-07s".

    Uses the shortest text that parses back to the same float, so distinct
    times always get distinct keys.
    """
    text = repr(float(seconds))
    if text.endswith(".0"):
        text = text[:-2]
    if text == "-0":
        text = "0"
    return f"{text}s"
