"""
Local Filesystem Storage Implementation.
Stores each key as one JSON file in a base directory on the server.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote, unquote

import aiofiles

from .interface import KVStore
from ..core.errors import StorageError

logger = logging.getLogger(__name__)

_SUFFIX = ".json"


class LocalKVStore(KVStore):
    """
    Local filesystem key-value store.
    Keys are percent-encoded into file names so ``chat:u1:c1`` becomes
    ``chat%3Au1%3Ac1.json`` and can never escape the base directory.
    """

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Directory holding one file per key
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        if not key:
            raise StorageError("Store key must not be empty")
        return self.base_dir / (quote(key, safe="") + _SUFFIX)

    @staticmethod
    def _key_for(filename: str) -> Optional[str]:
        if not filename.endswith(_SUFFIX):
            return None
        return unquote(filename[:-len(_SUFFIX)])

    async def set(self, key: str, value: Any) -> None:
        path = self._path_for(key)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            payload = json.dumps(value, ensure_ascii=False)
            async with aiofiles.open(tmp_path, 'w', encoding='utf-8') as f:
                await f.write(payload)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving key {key}: {e}")
            raise StorageError(f"Failed to save key {key}", details=str(e)) from e

    async def get(self, key: str) -> Optional[Any]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return await self._read(path, key)

    async def _read(self, path: Path, key: str) -> Optional[Any]:
        try:
            async with aiofiles.open(path, 'r', encoding='utf-8') as f:
                content = await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error(f"Error loading key {key}: {e}")
            raise StorageError(f"Failed to load key {key}", details=str(e)) from e

        try:
            return json.loads(content)
        except json.JSONDecodeError:
            # Corrupt entries behave like malformed records, not like outages
            logger.warning(f"Stored value for key {key} is not valid JSON")
            return None

    async def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Error deleting key {key}: {e}")
            raise StorageError(f"Failed to delete key {key}", details=str(e)) from e

    async def get_by_prefix(self, prefix: str) -> List[Dict[str, Any]]:
        try:
            filenames = sorted(os.listdir(self.base_dir))
        except OSError as e:
            logger.error(f"Error scanning prefix {prefix}: {e}")
            raise StorageError(f"Failed to scan prefix {prefix}", details=str(e)) from e

        results = []
        for filename in filenames:
            key = self._key_for(filename)
            if key is None or not key.startswith(prefix):
                continue
            value = await self._read(self.base_dir / filename, key)
            results.append({"key": key, "value": value})
        return sorted(results, key=lambda item: item["key"])
