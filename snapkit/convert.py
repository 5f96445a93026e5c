"""Conversions between wire messages and native snapshot types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from snapkit.status import StatusError
from snapkit.types import Info, Kind

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NANOS_PER_SECOND = 1_000_000_000


class ConversionError(Exception):
    """A wire message could not be converted into a native value."""


class TimestampError(ConversionError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to convert GRPC timestamp: {detail}")
        self.detail = detail


class InvalidEnumValue(ConversionError):
    def __init__(self, value: int) -> None:
        super().__init__(f"Invalid enum value: {value}")
        self.value = value


@dataclass(frozen=True)
class Timestamp:
    """A point in time as seconds and nanoseconds since the Unix epoch."""

    seconds: int = 0
    nanos: int = 0

    @classmethod
    def from_datetime(cls, moment: datetime) -> Timestamp:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        delta = moment - _EPOCH
        return cls(delta.days * 86400 + delta.seconds, delta.microseconds * 1000)

    def to_datetime(self) -> datetime:
        """Return the aware UTC datetime; precision below a microsecond is dropped."""
        carry, nanos = divmod(self.nanos, _NANOS_PER_SECOND)
        seconds = self.seconds + carry
        try:
            return _EPOCH + timedelta(seconds=seconds, microseconds=nanos // 1000)
        except (OverflowError, ValueError) as exc:
            raise TimestampError(f"timestamp out of range: {self}") from exc


@dataclass
class InfoMessage:
    """Wire form of snapshot info."""

    name: str = ""
    parent: str = ""
    kind: int = 0
    created_at: Timestamp | None = None
    updated_at: Timestamp | None = None
    labels: dict[str, str] = field(default_factory=dict)


def kind_to_int(kind: Kind) -> int:
    return int(kind)


def kind_from_int(value: int) -> Kind:
    try:
        return Kind(value)
    except ValueError:
        raise InvalidEnumValue(value) from None


def info_from_message(message: InfoMessage) -> Info:
    """Convert a wire message into Info; missing timestamps mean the epoch."""
    return Info(
        kind=kind_from_int(message.kind),
        name=message.name,
        parent=message.parent,
        labels=dict(message.labels),
        created_at=(message.created_at or Timestamp()).to_datetime(),
        updated_at=(message.updated_at or Timestamp()).to_datetime(),
    )


def info_to_message(info: Info) -> InfoMessage:
    return InfoMessage(
        name=info.name,
        parent=info.parent,
        kind=kind_to_int(info.kind),
        created_at=Timestamp.from_datetime(info.created_at),
        updated_at=Timestamp.from_datetime(info.updated_at),
        labels=dict(info.labels),
    )


def conversion_status(err: ConversionError) -> StatusError:
    return StatusError.internal(str(err))