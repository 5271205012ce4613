"""Car identifier value object helpers."""

import re
import secrets
import time

_CAR_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def is_valid_car_id(value: object) -> bool:
    """
    Check whether a value is a well-formed car identifier.

    Args:
        value: Candidate identifier (any type, usually from a request body)

    Returns:
        True if value is a 24 hex digit string
    """
    return isinstance(value, str) and _CAR_ID_PATTERN.fullmatch(value) is not None


def new_car_id() -> str:
    """
    Generate a new car identifier.

    The first 8 hex digits encode the creation second so identifiers sort
    roughly by insertion time; the rest is random.

    Returns:
        24 hex digit identifier
    """
    return f"{int(time.time()):08x}{secrets.token_hex(8)}"
