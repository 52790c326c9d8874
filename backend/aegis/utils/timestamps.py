import math

from heliclockter import datetime_utc


def now_timestamp() -> int:
    """Current time as whole epoch seconds, rounded up."""
    return math.ceil(datetime_utc.now().timestamp())
