from datetime import datetime, timezone

import pytest

from snapkit.types import Info, Kind, Mount, Snapshotter, Usage


class _Memory(Snapshotter):
    def __init__(self):
        self.removed = []

    async def stat(self, key):
        return Info(name=key)

    async def update(self, info, fieldpaths):
        return info

    async def usage(self, key):
        return Usage()

    async def mounts(self, key):
        return [Mount(type="bind", source=key)]

    async def prepare(self, key, parent, labels):
        return []

    async def view(self, key, parent, labels):
        return []

    async def commit(self, name, key, labels):
        return None

    async def remove(self, key):
        self.removed.append(key)


def test_kind_default_is_unknown():
    assert Info().kind is Kind.UNKNOWN
    assert [k.value for k in Kind] == [0, 1, 2, 3]


def test_info_defaults():
    before = datetime.now(timezone.utc)
    info = Info()
    after = datetime.now(timezone.utc)
    assert info.name == ""
    assert info.parent == ""
    assert info.labels == {}
    assert before <= info.created_at <= after
    assert before <= info.updated_at <= after


def test_info_labels_not_shared():
    a, b = Info(), Info()
    a.labels["x"] = "y"
    assert b.labels == {}


def test_usage_default_zero():
    assert Usage() == Usage(inodes=0, size=0)


def test_usage_iadd_in_place():
    usage = Usage(inodes=1, size=10)
    same = usage
    usage += Usage(inodes=2, size=5)
    assert same is usage
    assert usage == Usage(inodes=3, size=15)


def test_usage_add_is_commutative_and_pure():
    a, b = Usage(4, 7), Usage(1, 2)
    assert a + b == b + a
    assert a == Usage(4, 7)


def test_usage_add_rejects_other_types():
    with pytest.raises(TypeError):
        Usage() + 1


def test_snapshotter_is_abstract():
    with pytest.raises(TypeError):
        Snapshotter()


@pytest.mark.asyncio
async def test_default_clear_returns_none_and_methods_work():
    snap = _Memory()
    assert await snap.clear() is None
    assert (await snap.stat("k1")).name == "k1"
    assert await snap.mounts("src") == [Mount(type="bind", source="src")]
    await snap.remove("k2")
    assert snap.removed == ["k2"]