"""
Request claim values.

Claims decoded from an access token or STS session are heterogeneous, so
they are modelled as a closed recursive union instead of ``Any``. Each
variant has exactly one textual rendering, used by the canonical encoder.
"""
from typing import Dict, List, Union

from pydantic import StrictBool, StrictFloat, StrictInt, StrictStr
from typing_extensions import TypeAliasType

# Rendering of a null claim
NIL = "<nil>"

ClaimValue = TypeAliasType(
    "ClaimValue",
    "Union[StrictBool, StrictInt, StrictFloat, StrictStr, List[ClaimValue], Dict[str, ClaimValue], None]",
)


def render_claim(value: object) -> str:
    """Render a single claim value as canonical text. Never raises."""
    if value is None:
        return NIL
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _render_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(render_claim(v) for v in value) + "]"
    if isinstance(value, dict):
        return "{" + render_pairs(value) + "}"
    return str(value)


def render_pairs(mapping: dict) -> str:
    """Join a map as ``k1=v1,k2=v2``, sorted by the full pair string."""
    pairs = [f"{k}={render_claim(v)}" for k, v in mapping.items()]
    return ",".join(sorted(pairs))


def _render_float(value: float) -> str:
    if value != value or value in (float("inf"), float("-inf")):
        return repr(value)
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)
