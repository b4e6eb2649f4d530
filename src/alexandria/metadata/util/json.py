from __future__ import annotations

import json
from typing import Any, TypedDict, Unpack

from pydantic_core import to_jsonable_python


class _JsonDumpsKwargs(TypedDict, total=False):
    skipkeys: bool
    ensure_ascii: bool
    check_circular: bool
    allow_nan: bool
    indent: None | int | str
    separators: tuple[str, str] | None
    sort_keys: bool


def json_serializer(obj: Any, **kwargs: Unpack[_JsonDumpsKwargs]) -> str:
    # Dates, decimals and pydantic models in attribute records and reports
    # are handed to the pydantic encoder.
    return json.dumps(obj, default=to_jsonable_python, **kwargs)
