from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from trackcore.subject.exceptions import InvalidArgument, SubjectError
from trackcore.subject.models import SubjectConfiguration
from trackcore.subject.payload import Payload
from trackcore.subject.platform_context import DeviceInfoMonitor
from trackcore.subject.subject import SUBJECT_FIELDS, Subject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubjectPayloads:
    """The three subject payloads, taken together so they describe the same state."""

    standard: Payload
    platform: Payload | None
    geo_location: dict[str, float] | None


class SubjectController:
    """Owns one Subject and serialises every read and write through a single lock.

    Usage:
        controller = SubjectController(Subject(geo_location_context=True))
        controller.update(geo_latitude=1.23, geo_longitude=4.56)
        payloads = controller.payloads()
    """

    def __init__(
        self,
        subject: Subject,
        device_info_monitor: DeviceInfoMonitor | None = None,
    ) -> None:
        self._subject = subject
        self._device_info_monitor = device_info_monitor
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[Subject]:
        """Hold the lock for a block of reads and writes on the subject."""
        with self._lock:
            yield self._subject

    def get(self, field: str) -> Any:
        if field not in SUBJECT_FIELDS:
            raise InvalidArgument(field, None, "unknown subject field")
        with self._lock:
            return getattr(self._subject, field)

    def update(self, **fields: Any) -> None:
        """Set several fields at once. Either all of them change or none do."""
        unknown = sorted(set(fields) - SUBJECT_FIELDS)
        if unknown:
            raise InvalidArgument(unknown[0], fields[unknown[0]], "unknown subject field")
        with self._lock:
            state = vars(self._subject)
            saved = dict(state)
            try:
                for name, value in fields.items():
                    setattr(self._subject, name, value)
            except SubjectError:
                state.clear()
                state.update(saved)
                raise

    def payloads(self) -> SubjectPayloads:
        with self._lock:
            return SubjectPayloads(
                standard=self._subject.get_standard_dict(),
                platform=self._subject.get_platform_dict(),
                geo_location=self._subject.get_geo_location_dict(),
            )

    def reset(self, configuration: SubjectConfiguration) -> None:
        """Replace the subject with a fresh one built from configuration."""
        subject = Subject._from_configuration(configuration, self._device_info_monitor)
        with self._lock:
            self._subject = subject
        logger.info(
            "Subject reset (platform_context=%s, geo_location_context=%s)",
            configuration.platform_context,
            configuration.geo_location_context,
        )
