from typing import Any, Dict, Optional, Tuple


def int_option(data: Dict[str, Any], key: str, default: int) -> Tuple[Optional[int], Optional[str]]:
    """
    Read a non-negative integer option from a request body.

    Accepts ints and digit strings. Returns (value, None) or (None, error message).
    """
    value = data.get(key)
    if value is None:
        return default, None
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        return None, f'{key} must be a non-negative integer'
    try:
        number = int(value)
    except ValueError:
        return None, f'{key} must be a non-negative integer'
    if number < 0:
        return None, f'{key} must be a non-negative integer'
    return number, None
