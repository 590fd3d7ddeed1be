"""Reading vfeed items from a directory tree of JSON files."""

from __future__ import annotations

import glob
import json
import logging
import os
from typing import Iterator

from nvdtools.providers.vfeed.schema import Item, item_from_dict

_log = logging.getLogger(__name__)

_SUFFIX_PATTERN = os.path.join("*", "CVE-*.json")


class Client:
    """Reads items from ``<path>/*/CVE-*.json``."""

    def __init__(self, path: str) -> None:
        self.path = path

    def fetch_all_vulnerabilities(self, since: int) -> Iterator[Item]:
        """Yield every item in order of file path; ``since`` is ignored.

        Iteration stops, with the failure logged, at the first file that
        cannot be read.
        """
        matches = sorted(glob.glob(os.path.join(glob.escape(self.path), _SUFFIX_PATTERN)))
        return self._items(matches)

    @staticmethod
    def _items(matches: list[str]) -> Iterator[Item]:
        for match in matches:
            try:
                item = _unmarshal_file(match)
            except (OSError, ValueError) as e:
                _log.error("Failed to unmarshal %s: %s", match, e)
                return
            yield item


def _unmarshal_file(path: str) -> Item:
    with open(path, "rb") as f:
        data = json.load(f)
    return item_from_dict(data)