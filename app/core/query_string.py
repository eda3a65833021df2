import math
from typing import Any, Dict, Union

Primitive = Union[bool, int, float, str]


def _to_number(value: str) -> Union[int, float, None]:
    # Blank strings count as zero
    if not value.strip():
        return 0
    # float() accepts digit separators ("1_000"); those stay strings
    if "_" in value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def string_to_primitive_types(query_params: Dict[str, Any]) -> Dict[str, Primitive]:
    """
    Convert query-string values to booleans and numbers in place.

    {"title": "accountant", "minSalary": "1000", "hasEquity": "true"}
    -> {"title": "accountant", "minSalary": 1000, "hasEquity": True}

    Every key is converted; filtering unknown keys is left to the caller.
    Returns the same dict it was given.
    """
    for key, value in query_params.items():
        if not isinstance(value, str):
            continue
        if value == "true":
            query_params[key] = True
        elif value == "false":
            query_params[key] = False
        else:
            number = _to_number(value)
            if number is not None:
                query_params[key] = number

    return query_params
