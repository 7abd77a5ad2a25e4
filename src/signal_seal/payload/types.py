"""Records flowing through the payload assembler.

Device and browser attributes come from outside the package and are
embedded verbatim, so they are pydantic models serialised under their
camelCase wire names. Per-transaction values are frozen dataclasses.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from signal_seal.entropy.base import EntropySource

NONCE_LENGTH = 16
VIDEO_INPUT = "videoinput"


def wall_clock_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


class BrowserFingerprint(BaseModel):
    """Read-only snapshot of browser attributes.

    ``webdriver`` is the automation flag; ``None`` means the attribute was
    not exposed. ``device_memory`` is in GiB.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_agent: str = Field(alias="userAgent")
    language: str
    platform: str
    screen_width: int = Field(alias="screenWidth")
    screen_height: int = Field(alias="screenHeight")
    color_depth: int = Field(alias="colorDepth")
    timezone_offset: int = Field(alias="timezoneOffset")
    cookies_enabled: bool = Field(alias="cookiesEnabled")
    webdriver: bool | None = None
    hardware_concurrency: int = Field(alias="hardwareConcurrency")
    device_memory: int | float = Field(default=4, alias="deviceMemory")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class MediaDeviceInfo(BaseModel):
    """The video input device reported in the payload."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    device_id: str = Field(default="default", alias="deviceId")
    group_id: str = Field(default="", alias="groupId")
    kind: Literal["videoinput"] = VIDEO_INPUT
    label: str = "FaceTime HD Camera"

    @classmethod
    def from_devices(cls, devices: Iterable[Mapping[str, Any]]) -> MediaDeviceInfo:
        """Build from an enumerated device list.

        Takes the first ``videoinput`` entry. Missing or empty fields, or no
        video input at all, fall back to the field defaults one by one.
        """
        found: Mapping[str, Any] = next(
            (d for d in devices if d.get("kind") == VIDEO_INPUT),
            {},
        )
        values = {
            key: found.get(key)
            for key in ("deviceId", "groupId", "label")
            if found.get(key)
        }
        return cls.model_validate(values)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


@dataclass(frozen=True, slots=True)
class TransactionContext:
    """Identity and timing of one sealing call.

    Attributes:
        transaction_id: Canonical UUID-4 text.
        timestamp_ms: Wall-clock milliseconds since the epoch.
        nonce: 16 CSPRNG bytes mixed into the key derivation input.
    """

    transaction_id: str
    timestamp_ms: int
    nonce: bytes

    def __post_init__(self) -> None:
        if len(self.nonce) != NONCE_LENGTH:
            raise ValueError(f"nonce must be {NONCE_LENGTH} bytes, got {len(self.nonce)}")
        if not 0 <= self.timestamp_ms < 2**64:
            raise ValueError(f"timestamp_ms out of range: {self.timestamp_ms}")
        uuid.UUID(self.transaction_id)  # raises ValueError on malformed ids

    @classmethod
    def create(
        cls,
        entropy: EntropySource,
        clock: Callable[[], int] = wall_clock_ms,
    ) -> TransactionContext:
        """Create a fresh context from *entropy* and *clock*."""
        return cls(
            transaction_id=entropy.random_uuid(),
            timestamp_ms=int(clock()),
            nonce=entropy.get_random_bytes(NONCE_LENGTH),
        )

    @property
    def timestamp_seconds(self) -> int:
        """Whole seconds, as sent in the transport body."""
        return self.timestamp_ms // 1000
