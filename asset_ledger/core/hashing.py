from __future__ import annotations

import hashlib
import json
from typing import Any, Mapping

# prev_hash of the first transfer record
GENESIS_HASH = "0" * 64


def canonical_bytes(payload: Mapping[str, Any]) -> bytes:
    """
    Stable UTF-8 encoding of a record payload.

    Keys sorted, no whitespace. Values are expected to be ints and strings
    only, so the encoding does not depend on float formatting.
    """
    return json.dumps(
        dict(payload), sort_keys=True, separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def chain_digest(prev_hash: str, payload: Mapping[str, Any]) -> str:
    h = hashlib.sha256()
    h.update(prev_hash.encode("ascii"))
    h.update(canonical_bytes(payload))
    return h.hexdigest()


def link_holds(prev_hash: str, entry_hash: str, payload: Mapping[str, Any]) -> bool:
    return entry_hash == chain_digest(prev_hash, payload)
