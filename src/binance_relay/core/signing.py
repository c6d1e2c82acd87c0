"""
Request signing for authenticated upstream endpoints.

The upstream verifies a HMAC-SHA256 signature computed over the exact query
string it receives, so the string signed here and the string sent must be
built by the same encoder, in the same parameter order.
"""
import hashlib
import hmac
import json
import time
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote_plus

# Substrings that mark an endpoint path as requiring a signed request
AUTHENTICATED_ENDPOINT_MARKERS = ("account", "allOrders", "myTrades")


def is_authenticated_endpoint(endpoint: str) -> bool:
    """
    Classify an endpoint path as authenticated.

    This is a plain substring test over the whole path, so
    ``/sapi/v1/sub-account/list`` is authenticated too.
    """
    return any(marker in endpoint for marker in AUTHENTICATED_ENDPOINT_MARKERS)


def current_timestamp_ms() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)


def render_number(value: float) -> str:
    """
    Render a float like JavaScript's ``Number.prototype.toString``.

    Positional notation for ``1e-6 <= |x| < 1e21``, otherwise an exponent
    without zero padding and with an explicit sign (``1e-7``, ``1.5e+21``).
    """
    if value != value:
        return "NaN"
    if value in (float("inf"), float("-inf")):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    if 1e-6 <= abs(value) < 1e21:
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")

    mantissa, _, exponent = repr(value).partition("e")
    if mantissa.endswith(".0"):
        mantissa = mantissa[:-2]
    power = int(exponent)
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def render_param_value(value: Any) -> str:
    """
    Render a JSON value as query parameter text.

    Scalars match what a browser's URLSearchParams produces. Arrays and
    objects become compact JSON, the format Binance expects for list
    parameters such as ``symbols``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return render_number(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def _form_encode(text: str) -> str:
    # application/x-www-form-urlencoded: "*" stays literal, "~" is escaped
    return quote_plus(text, safe="*").replace("~", "%7E")


def build_query_string(params: Mapping[str, Any]) -> str:
    """
    Build the canonical ``key=value&...`` query string.

    Pairs keep the mapping's insertion order; nothing is sorted.
    """
    return "&".join(
        f"{_form_encode(str(key))}={_form_encode(render_param_value(value))}"
        for key, value in params.items()
    )


def generate_signature(query_string: str, secret_key: str) -> str:
    """Lowercase hex HMAC-SHA256 of ``query_string`` keyed by ``secret_key``."""
    return hmac.new(
        secret_key.encode("utf-8"),
        query_string.encode("utf-8"),
        hashlib.sha256
    ).hexdigest()


def sign_parameters(
    params: Mapping[str, Any],
    secret_key: str,
    timestamp: Optional[int] = None
) -> Dict[str, Any]:
    """
    Return a copy of ``params`` with ``timestamp`` and ``signature`` appended.

    The signature covers the original parameters plus the timestamp. Both
    injected keys are appended, timestamp first, so the final query string
    ends with ``timestamp=...&signature=...``.
    """
    if timestamp is None:
        timestamp = current_timestamp_ms()

    # A caller supplied timestamp/signature keeps its position and is overwritten
    signed: Dict[str, Any] = dict(params)
    signed["timestamp"] = timestamp

    signed["signature"] = generate_signature(build_query_string(signed), secret_key)
    return signed


def build_upstream_url(base_url: str, endpoint: str, params: Mapping[str, Any]) -> str:
    """Join base URL and endpoint, appending ``?query`` only when non-empty."""
    query_string = build_query_string(params)
    url = f"{base_url}{endpoint}"
    return f"{url}?{query_string}" if query_string else url
