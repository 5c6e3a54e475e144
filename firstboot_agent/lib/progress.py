from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from requests.exceptions import RequestException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressEvent:
    fraction: float
    label: str
    key: str

    def __post_init__(self) -> None:
        if not 0.0 <= self.fraction <= 1.0:
            raise ValueError(f"progress fraction must be within [0, 1], got {self.fraction}")


class ProgressReporter:
    """Posts progress events to the tracking service.

    Delivery is best effort: failures are logged and reported as False.
    """

    def __init__(
        self,
        url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ) -> None:
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(self, event: ProgressEvent, serial: str) -> bool:
        payload = {
            "Sn": serial,
            "InstallProgress": event.fraction,
            "Title": event.label,
            "InstallLog": event.key,
        }
        logger.info("Progress %.2f %s (%s)", event.fraction, event.label, event.key)
        try:
            resp = self.session.post(self.url, json=payload, timeout=self.timeout)
        except RequestException as e:
            logger.error("progress report %s failed: %s", event.key, e)
            return False

        if resp.status_code != 200:
            logger.error("progress report %s failed: http status code: %d", event.key, resp.status_code)
            return False
        return True

    def report(self, fraction: float, label: str, key: str, serial: str) -> bool:
        return self.send(ProgressEvent(fraction=fraction, label=label, key=key), serial)
