# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""On-disk cache for the most recently fetched remote schema."""

import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)


def read_json_object(path: str) -> Dict[str, Any]:
    """Read a JSON file that must contain an object.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not valid JSON or not an object
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


class SchemaCache:
    """A single cached schema document at a fixed path."""

    def __init__(self, path: str):
        self.path = path

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def load(self) -> Dict[str, Any]:
        """Load the cached schema.

        Raises:
            OSError: If the cache file cannot be read
            ValueError: If the cache file is corrupt
        """
        return read_json_object(self.path)

    def save(self, schema: Dict[str, Any]) -> None:
        """Write the schema as pretty-printed JSON, creating parent directories."""
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(schema, f, indent=2, ensure_ascii=False)
            logger.info(f"Cached schema: {self.path}")
        except OSError as e:
            logger.error(f"Failed to write schema cache: {self.path}: {e}")
            raise
