import logging

import pytest

from snapkit.example import ExampleSnapshotter
from snapkit.service import (
    PrepareSnapshotRequest,
    StatSnapshotRequest,
    UsageRequest,
    server,
)
from snapkit.types import Info, Kind, Usage


@pytest.mark.asyncio
async def test_stat_returns_default_info(caplog):
    snap = ExampleSnapshotter()
    with caplog.at_level(logging.INFO, logger="snapkit.example"):
        info = await snap.stat("layer")
    assert info.kind is Kind.UNKNOWN
    assert info.name == ""
    assert info.labels == {}
    assert "Stat: layer" in caplog.messages


@pytest.mark.asyncio
async def test_update_returns_fresh_info():
    snap = ExampleSnapshotter()
    info = await snap.update(Info(kind=Kind.ACTIVE, name="n"), ["labels"])
    assert info.kind is Kind.UNKNOWN
    assert info.name == ""


@pytest.mark.asyncio
async def test_usage_is_zero():
    assert await ExampleSnapshotter().usage("k") == Usage(0, 0)


@pytest.mark.asyncio
async def test_mount_methods_return_empty_lists(caplog):
    snap = ExampleSnapshotter()
    with caplog.at_level(logging.INFO, logger="snapkit.example"):
        assert await snap.mounts("k") == []
        assert await snap.prepare("k", "p", {"a": "b"}) == []
        assert await snap.view("v", "p", {}) == []
    assert "Mounts: k" in caplog.messages
    assert "Prepare: key=k, parent=p, labels={'a': 'b'}" in caplog.messages
    assert "View: key=v, parent=p, labels={}" in caplog.messages


@pytest.mark.asyncio
async def test_commit_remove_and_clear(caplog):
    snap = ExampleSnapshotter()
    with caplog.at_level(logging.INFO, logger="snapkit.example"):
        assert await snap.commit("n", "k", {}) is None
        assert await snap.remove("k") is None
        assert await snap.clear() is None
    assert "Commit: name=n, key=k, labels={}" in caplog.messages
    assert "Remove: k" in caplog.messages


@pytest.mark.asyncio
async def test_served_through_service():
    svc = server(ExampleSnapshotter())
    stat = await svc.stat(StatSnapshotRequest(key="k"))
    assert stat.info.kind == 0
    assert stat.info.name == ""
    prepared = await svc.prepare(PrepareSnapshotRequest(key="k"))
    assert prepared.mounts == []
    usage = await svc.usage(UsageRequest(key="k"))
    assert (usage.size, usage.inodes) == (0, 0)