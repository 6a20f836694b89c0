"""Identifier codecs turning raw keys into opaque, scope-bound tokens and back."""
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Protocol, Union

from .errors import DecodeError, IndirectConfigError

__all__ = ["DecodedIdentifier", "IdentifierCodec", "SignedIdCodec"]


@dataclass(frozen=True)
class DecodedIdentifier:
    type_tag: str
    value: Any


class IdentifierCodec(Protocol):
    def encode(self, value: Any, type_tag: str, scope: Any = None) -> str: ...

    def decode(self, token: Any, scope: Any = None) -> DecodedIdentifier: ...


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    padded = text + "=" * (-len(text) % 4)
    return base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)


_UUID_MARKER = "$uuid"


def _json_default(value: Any) -> Any:
    if isinstance(value, uuid.UUID):
        return {_UUID_MARKER: str(value)}
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _json_object(obj: Dict[str, Any]) -> Any:
    if len(obj) == 1 and _UUID_MARKER in obj:
        return uuid.UUID(obj[_UUID_MARKER])
    return obj


class SignedIdCodec:
    """Deterministic HMAC-signed codec.

    A token is ``<payload>.<signature>`` where the payload is the base64url JSON
    array ``[type_tag, value]`` and the signature is a truncated HMAC-SHA256 of the
    scope and payload. UUID keys travel as ``{"$uuid": "..."}`` and decode back
    to ``uuid.UUID``. The same ``(value, type_tag, scope)`` always yields the same
    token; a token only decodes under the scope it was issued for.

    Args:
        secret: Signing key shared by every process that issues or reads tokens.
        signature_size: Number of HMAC bytes kept in the token.
    """

    def __init__(self, secret: Union[str, bytes], *, signature_size: int = 12):
        if not secret:
            raise ValueError("SignedIdCodec requires a non-empty secret")
        if not 8 <= signature_size <= 32:
            raise ValueError("signature_size must be between 8 and 32 bytes")
        self._key = secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)
        self._signature_size = signature_size

    def _sign(self, payload: bytes, scope: Any) -> bytes:
        scope_part = json.dumps(scope, separators=(",", ":"), sort_keys=True, default=str)
        message = scope_part.encode("utf-8") + b"\x00" + payload
        return hmac.new(self._key, message, hashlib.sha256).digest()[: self._signature_size]

    def encode(self, value: Any, type_tag: str, scope: Any = None) -> str:
        try:
            text = json.dumps([type_tag, value], separators=(",", ":"), default=_json_default)
        except (TypeError, ValueError) as exc:
            raise IndirectConfigError(
                f"SignedIdCodec cannot encode {type(value).__name__} keys; pass a custom codec"
            ) from exc
        payload = text.encode("utf-8")
        return f"{_b64encode(payload)}.{_b64encode(self._sign(payload, scope))}"

    def decode(self, token: Any, scope: Any = None) -> DecodedIdentifier:
        if not isinstance(token, str) or token.count(".") != 1:
            raise DecodeError("Invalid value. Malformed identifier")
        body, signature = token.split(".")
        try:
            payload = _b64decode(body)
            received = _b64decode(signature)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError("Invalid value. Malformed identifier") from exc
        if not hmac.compare_digest(self._sign(payload, scope), received):
            raise DecodeError("Invalid value. Identifier is not valid in this scope")
        try:
            type_tag, value = json.loads(payload.decode("utf-8"), object_hook=_json_object)
        except (ValueError, TypeError) as exc:
            raise DecodeError("Invalid value. Malformed identifier") from exc
        return DecodedIdentifier(type_tag=type_tag, value=value)
