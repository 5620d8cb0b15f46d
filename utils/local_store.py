# utils/local_store.py
"""
Small persistent key-value store backed by a JSON file.

Holds the app instance's cached member record and session token between runs.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class LocalStore:

     def __init__(self, path: Union[str, Path]):
          self.path = Path(path)

     def _load(self) -> Dict[str, Any]:
          if not self.path.exists():
               return {}
          with self.path.open("r", encoding="utf-8") as fh:
               return json.load(fh)

     def _save(self, data: Dict[str, Any]) -> None:
          self.path.parent.mkdir(parents=True, exist_ok=True)
          tmp = self.path.with_suffix(self.path.suffix + ".tmp")
          with tmp.open("w", encoding="utf-8") as fh:
               json.dump(data, fh)
          os.replace(tmp, self.path)

     def get_item(self, key: str) -> Optional[str]:
          return self._load().get(key)

     def set_item(self, key: str, value: str) -> None:
          data = self._load()
          data[key] = value
          self._save(data)

     def remove_item(self, key: str) -> None:
          data = self._load()
          if key in data:
               del data[key]
               self._save(data)
