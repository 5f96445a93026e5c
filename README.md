# snapkit

`snapkit` helps you write a remote snapshotter: a component that prepares,
views, commits and removes filesystem snapshots on request. It keeps the
request and response handling behind a single abstract class, `Snapshotter`,
so you only implement the snapshot logic itself.

## What is in the package

- `snapkit.types` — the native model:
  - `Kind`, an integer enum: `UNKNOWN` (0), `VIEW` (1), `ACTIVE` (2),
    `COMMITTED` (3).
  - `Info`, a dataclass with a snapshot's `kind`, `name`, `parent`,
    `labels` and the timezone-aware UTC datetimes `created_at` and
    `updated_at` (both default to the current time).
  - `Usage`, a dataclass of `inodes` and `size`; two usages combine with
    `+` and `+=`.
  - `Mount`, a dataclass of `type`, `source`, `target` and `options`.
  - `Snapshotter`, an abstract class with the async methods `stat`,
    `update`, `usage`, `mounts`, `prepare`, `view`, `commit` and `remove`
    to implement, and `clear`, which performs no cleanup unless you
    override it.
- `snapkit.convert` — conversions between the native types and their wire
  forms:
  - `kind_to_int` and `kind_from_int` (an unknown value raises
    `InvalidEnumValue`).
  - `Timestamp` (seconds and nanoseconds since the Unix epoch) with
    `from_datetime` and `to_datetime`; naive datetimes are taken as UTC,
    and precision below a microsecond is dropped. A timestamp that does not
    fit a datetime raises `TimestampError`.
  - `InfoMessage`, the wire form of `Info`, with `info_from_message` and
    `info_to_message`. A message without a timestamp converts to the epoch.
  - `ConversionError`, the base of `TimestampError` and `InvalidEnumValue`,
    and `conversion_status`, which turns one into an internal `StatusError`.
- `snapkit.status` — `StatusCode` (the canonical status codes) and the
  `StatusError` exception with its `code` and `message`, the constructors
  `internal`, `invalid_argument`, `failed_precondition` and
  `unimplemented`, and `status_from_error`, which wraps any error into an
  internal status carrying the error's `repr`.
- `snapkit.service` — the request and response dataclasses
  (`PrepareSnapshotRequest`, `StatSnapshotResponse`, `FieldMask`,
  `UpdateSnapshotRequest`, `UsageResponse` and the rest) and
  `SnapshotsService`, which hands each request to your snapshotter. Build
  one with `server(snapshotter)`.
- `snapkit.example` — `ExampleSnapshotter`, a minimal implementation that
  logs every call through `logging` and returns empty or default values.

## Writing a snapshotter

```python
from snapkit.types import Info, Kind, Snapshotter, Usage


class MemorySnapshotter(Snapshotter):
    def __init__(self):
        self.snapshots = {}

    async def stat(self, key):
        return self.snapshots[key]

    async def update(self, info, fieldpaths):
        self.snapshots[info.name] = info
        return info

    async def usage(self, key):
        return Usage()

    async def mounts(self, key):
        return []

    async def prepare(self, key, parent, labels):
        self.snapshots[key] = Info(kind=Kind.ACTIVE, name=key, parent=parent, labels=labels)
        return []

    async def view(self, key, parent, labels):
        self.snapshots[key] = Info(kind=Kind.VIEW, name=key, parent=parent, labels=labels)
        return []

    async def commit(self, name, key, labels):
        active = self.snapshots.pop(key)
        self.snapshots[name] = Info(
            kind=Kind.COMMITTED, name=name, parent=active.parent, labels=labels
        )

    async def remove(self, key):
        del self.snapshots[key]
```

## Serving requests

Wrap the snapshotter with `server` and hand it requests:

```python
import asyncio

from snapkit.service import PrepareSnapshotRequest, StatSnapshotRequest, server
from snapkit.status import StatusError


async def main():
    service = server(MemorySnapshotter())
    await service.prepare(PrepareSnapshotRequest(key="layer-1", parent="", labels={}))
    try:
        response = await service.stat(StatSnapshotRequest(key="layer-1"))
        print(response.info)
    except StatusError as err:
        print(err.code, err.message)


asyncio.run(main())
```

Every exception raised by your snapshotter reaches the caller as a
`StatusError` with code `INTERNAL`. An update request without info fails
with `FAILED_PRECONDITION`, an update whose info cannot be converted fails
with `INVALID_ARGUMENT`, and `list` always fails with `UNIMPLEMENTED`.
`commit`, `remove` and `cleanup` return `None` on success; `cleanup` calls
the snapshotter's `clear`.

## What the package does not do

`SnapshotsService` is called in-process with request objects. The package
has no network transport: it does not listen on a socket, does not encode
or decode messages on the wire, and has no command that starts a
snapshotter process. Listing snapshots is not supported.

## Running the tests

Install the package with its `test` extra and run `pytest` from the project
directory.