"""
SQL fragment helpers shared by the CRUD layer.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from app.core.errors import BadRequestError


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Optional[Dict[str, str]] = None
) -> Tuple[str, List[Any]]:
    """
    Build the SET portion of a single-row UPDATE from a sparse field map.

    Fields keep their insertion order; each becomes `"<column>"=$<n>` with n
    starting at 1, and its value lands at the same position in `values`.
    Fields missing from `js_to_sql` use their own name as the column.

    Example:
        sql_for_partial_update({"firstName": "Aliya", "age": 32},
                               {"firstName": "first_name"})
        -> ('"first_name"=$1, "age"=$2', ["Aliya", 32])

    The caller binds the row key at position len(values) + 1.

    Raises:
        BadRequestError: If data_to_update is empty
    """
    keys = list(data_to_update.keys())
    if not keys:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    cols = [
        f'"{js_to_sql.get(col_name, col_name)}"=${idx}'
        for idx, col_name in enumerate(keys, start=1)
    ]

    return ", ".join(cols), list(data_to_update.values())
