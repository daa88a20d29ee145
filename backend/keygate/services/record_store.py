"""
Record Store Interface

Path-addressable key-value tree used by the validator. Records live at
slash separated paths such as "keys/<id>" and "applications/<name>".
"""
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from keygate.models.record import Record

# Characters that cannot appear inside a single path segment
_FORBIDDEN_SEGMENT = re.compile(r"[/.#$\[\]\x00-\x1f\x7f]")


def is_valid_segment(segment: str) -> bool:
    """Check whether a value can be used as one path segment."""
    return bool(segment) and not _FORBIDDEN_SEGMENT.search(segment)


def split_path(path: str) -> List[str]:
    """Split a path into its non-empty segments ("/keys//a/" -> ["keys", "a"])."""
    return [part for part in path.split("/") if part]


def join_path(*parts: str) -> str:
    """
    Join path segments into a normalized path.

    Each argument may itself contain slashes; empty segments are dropped.
    """
    segments: List[str] = []
    for part in parts:
        segments.extend(split_path(part))
    return "/".join(segments)


class RecordStore(ABC):
    """Record Store Abstract Base Class"""

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check whether a node (or any node below it) exists at path"""
        pass

    @abstractmethod
    async def get(self, path: str) -> Optional[Dict[str, Any]]:
        """
        Read the full record at path

        Returns:
        - dict: record fields, or the subtree assembled from child nodes
        - None: nothing stored at or below path
        """
        pass

    @abstractmethod
    async def update(self, path: str, fields: Dict[str, Any]) -> None:
        """
        Merge fields into the record at path

        Fields not named in the update keep their value. A missing node is created.
        """
        pass


class TortoiseRecordStore(RecordStore):
    """Record store backed by the Record model (one row per leaf node)."""

    async def exists(self, path: str) -> bool:
        path = join_path(path)
        if await Record.filter(path=path).exists():
            return True
        return bool(await self._descendants(path))

    async def get(self, path: str) -> Optional[Dict[str, Any]]:
        path = join_path(path)
        node = await Record.get_or_none(path=path)
        if node is not None:
            return dict(node.data or {})

        # No leaf at path: assemble the subtree from descendants
        prefix = f"{path}/" if path else ""
        rows = await self._descendants(path)
        if not rows:
            return None
        tree: Dict[str, Any] = {}
        for row in rows:
            cursor = tree
            segments = split_path(row.path[len(prefix):])
            for segment in segments[:-1]:
                cursor = cursor.setdefault(segment, {})
            cursor[segments[-1]] = dict(row.data or {})
        return tree

    async def update(self, path: str, fields: Dict[str, Any]) -> None:
        path = join_path(path)
        node = await Record.get_or_none(path=path)
        if node is None:
            await Record.create(path=path, data=dict(fields))
            return
        node.data = {**(node.data or {}), **fields}
        await node.save(update_fields=["data", "updated_at"])

    @staticmethod
    async def _descendants(path: str) -> List[Record]:
        prefix = f"{path}/" if path else ""
        rows = await Record.filter(path__startswith=prefix).order_by("path")
        # LIKE is case-insensitive on SQLite; keep exact prefix matches only
        return [row for row in rows if row.path.startswith(prefix)]
