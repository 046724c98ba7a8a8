"""Byte-stable JSON for change lists and step outputs."""

import json
from typing import Any


def canonical_dumps(obj: Any, pretty: bool = False) -> str:
    """
    Serialize ``obj`` deterministically.

    Keys are sorted and non-ASCII is kept as UTF-8, so two runs over the same
    schemas produce identical text. Lists keep their order (pass order is
    meaningful). ``pretty`` indents for human consumption.
    """
    if pretty:
        return json.dumps(obj, sort_keys=True, indent=2, ensure_ascii=False)
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
