"""A snapshotter that logs every call and does nothing else."""

from __future__ import annotations

import logging

from snapkit.types import Info, Mount, Snapshotter, Usage

logger = logging.getLogger(__name__)


class ExampleSnapshotter(Snapshotter):
    """Logs each request and answers with empty or default values."""

    async def stat(self, key: str) -> Info:
        logger.info("Stat: %s", key)
        return Info()

    async def update(self, info: Info, fieldpaths: list[str] | None) -> Info:
        logger.info("Update: info=%r, fieldpaths=%r", info, fieldpaths)
        return Info()

    async def usage(self, key: str) -> Usage:
        logger.info("Usage: %s", key)
        return Usage()

    async def mounts(self, key: str) -> list[Mount]:
        logger.info("Mounts: %s", key)
        return []

    async def prepare(self, key: str, parent: str, labels: dict[str, str]) -> list[Mount]:
        logger.info("Prepare: key=%s, parent=%s, labels=%r", key, parent, labels)
        return []

    async def view(self, key: str, parent: str, labels: dict[str, str]) -> list[Mount]:
        logger.info("View: key=%s, parent=%s, labels=%r", key, parent, labels)
        return []

    async def commit(self, name: str, key: str, labels: dict[str, str]) -> None:
        logger.info("Commit: name=%s, key=%s, labels=%r", name, key, labels)

    async def remove(self, key: str) -> None:
        logger.info("Remove: %s", key)