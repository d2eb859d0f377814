"""Signature Version 2 request signing for Amazon MWS.

The canonical string is::

    METHOD\\nHOST\\nPATH\\nQUERY

where QUERY is the parameter set sorted by key (byte-wise) and percent-encoded
per RFC 3986. The signature is the base64 encoded HMAC-SHA256 of the canonical
string and is added to the parameters as ``Signature`` afterwards, so it is
never part of its own input.
"""

import base64
import hashlib
import hmac
from typing import Any, Dict, Mapping
from urllib.parse import quote

SIGNATURE_PARAM = "Signature"


def format_value(value: Any) -> str:
    """Serialize a parameter value the way MWS expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def percent_encode(value: Any) -> str:
    """RFC 3986 percent-encoding; only unreserved characters are left as is."""
    return quote(format_value(value), safe="~")


def encode_query(params: Mapping[str, Any]) -> str:
    """Sort parameters by key and serialize them as an encoded query string."""
    items = sorted(params.items(), key=lambda item: item[0].encode("utf-8"))
    return "&".join(f"{percent_encode(key)}={percent_encode(value)}" for key, value in items)


def canonical_string(method: str, host: str, path: str, params: Mapping[str, Any]) -> str:
    return f"{method.upper()}\n{host.lower()}\n{path}\n{encode_query(params)}"


def sign(method: str, host: str, path: str, params: Mapping[str, Any], secret_key: str) -> str:
    """Compute the request signature.

    Args:
        method: HTTP method
        host: Regional MWS host
        path: Request path
        params: Query parameters, without ``Signature``
        secret_key: MWS secret key

    Returns:
        Base64 encoded HMAC-SHA256 signature
    """
    message = canonical_string(method, host, path, params).encode("utf-8")
    digest = hmac.new(secret_key.encode("utf-8"), message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def sign_params(
    method: str, host: str, path: str, params: Mapping[str, Any], secret_key: str
) -> Dict[str, Any]:
    """Return a sorted copy of ``params`` with ``Signature`` appended."""
    unsigned = {key: value for key, value in params.items() if key != SIGNATURE_PARAM}
    signed = dict(sorted(unsigned.items(), key=lambda item: item[0].encode("utf-8")))
    signed[SIGNATURE_PARAM] = sign(method, host, path, unsigned, secret_key)
    return signed
