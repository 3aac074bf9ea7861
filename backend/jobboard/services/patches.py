from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from jobboard.errors import bad_request


def apply_patch(record: Any, changes: dict[str, Any], required: Iterable[str] = ()) -> None:
    """Copy explicitly supplied fields onto ``record``.

    ``changes`` comes from ``model_dump(exclude_unset=True)``, so an explicit
    ``None`` means "clear this field", which is refused for required columns.
    """
    for key in required:
        if key in changes and changes[key] is None:
            raise bad_request(f"{key} cannot be empty")
    for key, value in changes.items():
        setattr(record, key, value)


def check_salary_range(salary_min: int | None, salary_max: int | None) -> None:
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise bad_request("salary_min must not exceed salary_max")
