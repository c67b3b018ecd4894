# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HMAC-SHA256 session tokens.

A token is ``base64(payload) + "." + base64(hmac_sha256(key, payload))`` using
the URL-safe, unpadded alphabet. The signature covers the payload text itself,
not its encoding.
"""

from __future__ import annotations

import hashlib
from typing import Optional

from itsdangerous import BadData, Signer
from itsdangerous.encoding import base64_decode, base64_encode

SEP = b"."


class SessionSigner:
    """Signs and verifies payload strings with a single server-side key."""

    def __init__(self, secret_key: str, *, suffix: str = "") -> None:
        if not secret_key:
            raise ValueError("secret_key is required")
        # key_derivation="none": the HMAC key is exactly secret_key + suffix
        self._signer = Signer(
            secret_key + suffix,
            sep=SEP,
            key_derivation="none",
            digest_method=hashlib.sha256,
        )

    def sign(self, payload: str) -> str:
        raw = payload.encode("utf-8")
        return (base64_encode(raw) + SEP + self._signer.get_signature(raw)).decode("ascii")

    def verify(self, token: str) -> Optional[str]:
        """Return the signed payload, or None for anything that does not verify."""
        if not token:
            return None
        try:
            data = token.encode("ascii")
        except UnicodeEncodeError:
            return None

        parts = data.split(SEP)
        if len(parts) != 2:
            return None
        payload_b64, sig_b64 = parts
        if not payload_b64 or not sig_b64:
            return None

        try:
            raw = base64_decode(payload_b64)
            sig = base64_decode(sig_b64)
        except BadData:
            return None
        # reject non-canonical encodings (stray characters, dirty padding bits)
        if base64_encode(raw) != payload_b64 or base64_encode(sig) != sig_b64:
            return None

        if not self._signer.verify_signature(raw, sig_b64):
            return None
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
