"""Helpers for copying page metadata.

Hosts frequently hand structured metadata (page builder layouts, settings
blobs) back as serialized JSON text. Values are decoded before they are
written to the copy so they are stored as structured data again.
"""

import json
import logging
from typing import Any, Iterator, Tuple

from .models import Metadata

logger = logging.getLogger(__name__)


def maybe_deserialize(value: Any) -> Any:
    """Decode a JSON object or array stored as text; return anything else unchanged.

    Example:
        >>> maybe_deserialize('{"rows": [1, 2]}')
        {'rows': [1, 2]}
        >>> maybe_deserialize('42')
        '42'
    """
    if not isinstance(value, str):
        return value

    text = value.strip()
    if not text or text[0] not in '{[':
        return value

    try:
        decoded = json.loads(text)
    except ValueError:
        return value

    if isinstance(decoded, (dict, list)):
        return decoded
    return value


def iter_metadata_values(metadata: Metadata) -> Iterator[Tuple[str, Any]]:
    """Yield (key, value) for every value of every key, keys in sorted order."""
    for key in sorted(metadata):
        values = metadata[key]
        if not isinstance(values, (list, tuple)):
            logger.debug(f"Metadata key '{key}' holds a single value, wrapping it")
            values = [values]
        for value in values:
            yield key, value
