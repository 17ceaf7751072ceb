"""Repository base class"""

import json
import logging
from abc import ABC

from koyeb_keepalive.core.kv import KVStore

logger = logging.getLogger(__name__)


class BaseRepository(ABC):
    """Repository base class

    Reads and writes JSON documents stored as opaque strings in a KVStore.
    Store errors propagate; corrupt values are reported as missing.
    """

    def __init__(self, kv: KVStore):
        self.kv = kv

    async def _get_json(self, key: str, expected_type: type):
        """
        Read and decode a JSON value

        Args:
            key: KV key
            expected_type: list or dict

        Returns:
            Decoded value, or None when missing, unparsable or of the wrong shape
        """
        raw = await self.kv.get(key)
        if not raw:
            return None

        try:
            value = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Corrupt value for key '{key}', treating as empty: {e}")
            return None

        if not isinstance(value, expected_type):
            logger.warning(
                f"Unexpected type for key '{key}': {type(value).__name__}, treating as empty"
            )
            return None
        return value

    async def _put_json(self, key: str, value) -> None:
        """Encode and write a JSON value"""
        await self.kv.put(key, json.dumps(value, ensure_ascii=False))
