from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from ..core.exceptions import ValidationError
from ..cycles.model import Cycle


def decode_content(encoded: str) -> str:
    """Base64 transport payload -> UTF-8 text (GitHub wraps the payload with newlines)."""
    try:
        raw = base64.b64decode(encoded or "")
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValidationError(f"Cannot decode remote payload: {e}") from e


def encode_content(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def dump_json(data: Any) -> str:
    """Stable formatting used for every document written to the store or the cache."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def serialize_cycle(cycle: Cycle) -> str:
    return dump_json(cycle.to_dict())


def parse_cycle(text: str) -> Cycle:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ValidationError(f"Cycle document is not valid JSON: {e}") from e
    return Cycle.from_dict(data)
