"""Request handling for the snapshots service on top of a Snapshotter."""

from __future__ import annotations

from dataclasses import dataclass, field

from snapkit.convert import ConversionError, InfoMessage, info_from_message, info_to_message
from snapkit.status import StatusError, status_from_error
from snapkit.types import Mount, Snapshotter


@dataclass
class PrepareSnapshotRequest:
    key: str = ""
    parent: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class PrepareSnapshotResponse:
    mounts: list[Mount] = field(default_factory=list)


@dataclass
class ViewSnapshotRequest:
    key: str = ""
    parent: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class ViewSnapshotResponse:
    mounts: list[Mount] = field(default_factory=list)


@dataclass
class MountsRequest:
    key: str = ""


@dataclass
class MountsResponse:
    mounts: list[Mount] = field(default_factory=list)


@dataclass
class CommitSnapshotRequest:
    name: str = ""
    key: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class RemoveSnapshotRequest:
    key: str = ""


@dataclass
class StatSnapshotRequest:
    key: str = ""


@dataclass
class StatSnapshotResponse:
    info: InfoMessage | None = None


@dataclass
class FieldMask:
    """Names the fields of a message that an update touches."""

    paths: list[str] = field(default_factory=list)


@dataclass
class UpdateSnapshotRequest:
    info: InfoMessage | None = None
    update_mask: FieldMask | None = None


@dataclass
class UpdateSnapshotResponse:
    info: InfoMessage | None = None


@dataclass
class ListSnapshotsRequest:
    filters: list[str] = field(default_factory=list)


@dataclass
class UsageRequest:
    key: str = ""


@dataclass
class UsageResponse:
    size: int = 0
    inodes: int = 0


@dataclass
class CleanupRequest:
    pass


class SnapshotsService:
    """Serves snapshots service requests by delegating to a Snapshotter.

    Every failure is raised as a StatusError; errors raised by the
    snapshotter itself become internal status errors.
    """

    def __init__(self, snapshotter: Snapshotter) -> None:
        self.snapshotter = snapshotter

    async def prepare(self, request: PrepareSnapshotRequest) -> PrepareSnapshotResponse:
        try:
            mounts = await self.snapshotter.prepare(request.key, request.parent, request.labels)
        except Exception as err:
            raise status_from_error(err) from err
        return PrepareSnapshotResponse(mounts=list(mounts))

    async def view(self, request: ViewSnapshotRequest) -> ViewSnapshotResponse:
        try:
            mounts = await self.snapshotter.view(request.key, request.parent, request.labels)
        except Exception as err:
            raise status_from_error(err) from err
        return ViewSnapshotResponse(mounts=list(mounts))

    async def mounts(self, request: MountsRequest) -> MountsResponse:
        try:
            mounts = await self.snapshotter.mounts(request.key)
        except Exception as err:
            raise status_from_error(err) from err
        return MountsResponse(mounts=list(mounts))

    async def commit(self, request: CommitSnapshotRequest) -> None:
        try:
            await self.snapshotter.commit(request.name, request.key, request.labels)
        except Exception as err:
            raise status_from_error(err) from err

    async def remove(self, request: RemoveSnapshotRequest) -> None:
        try:
            await self.snapshotter.remove(request.key)
        except Exception as err:
            raise status_from_error(err) from err

    async def stat(self, request: StatSnapshotRequest) -> StatSnapshotResponse:
        try:
            info = await self.snapshotter.stat(request.key)
        except Exception as err:
            raise status_from_error(err) from err
        return StatSnapshotResponse(info=info_to_message(info))

    async def update(self, request: UpdateSnapshotRequest) -> UpdateSnapshotResponse:
        if request.info is None:
            raise StatusError.failed_precondition("info is required")
        try:
            info = info_from_message(request.info)
        except ConversionError as err:
            raise StatusError.invalid_argument(f"Failed to convert timestamp: {err}") from err

        fields = list(request.update_mask.paths) if request.update_mask is not None else None

        try:
            updated = await self.snapshotter.update(info, fields)
        except Exception as err:
            raise status_from_error(err) from err
        return UpdateSnapshotResponse(info=info_to_message(updated))

    async def list(self, request: ListSnapshotsRequest) -> None:
        raise StatusError.unimplemented("not implemented")

    async def usage(self, request: UsageRequest) -> UsageResponse:
        try:
            usage = await self.snapshotter.usage(request.key)
        except Exception as err:
            raise status_from_error(err) from err
        return UsageResponse(size=usage.size, inodes=usage.inodes)

    async def cleanup(self, request: CleanupRequest) -> None:
        try:
            await self.snapshotter.clear()
        except Exception as err:
            raise status_from_error(err) from err


def server(snapshotter: Snapshotter) -> SnapshotsService:
    """Create a snapshots service from any Snapshotter implementation."""
    return SnapshotsService(snapshotter)