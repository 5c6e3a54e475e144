"""Inventory service client.

The inventory service is the system of record for per-device network facts.
It answers ``GET <url>?sn=<serial>&type=json`` with::

    {"Status": "success", "Message": "...", "Content": {"Hostname": ..., ...}}

Field names are matched case-insensitively, missing fields stay empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests.exceptions import RequestException

from ..errors import InventoryError

logger = logging.getLogger(__name__)

# dataclass field -> key in the service payload
_FIELD_KEYS = {
    "bonding": "Bonding",
    "gateway": "Gateway",
    "hostname": "Hostname",
    "ip": "Ip",
    "netmask": "Netmask",
    "trunk": "Trunk",
    "vlan": "Vlan",
    "hwaddr": "HWADDR",
}


@dataclass(frozen=True)
class DeviceNetworkProfile:
    bonding: str = ""
    gateway: str = ""
    hostname: str = ""
    ip: str = ""
    netmask: str = ""
    trunk: str = ""
    vlan: str = ""
    hwaddr: str = ""

    @classmethod
    def from_content(cls, content: Optional[Dict[str, Any]]) -> "DeviceNetworkProfile":
        lowered = {str(k).lower(): v for k, v in (content or {}).items()}
        values = {}
        for name, key in _FIELD_KEYS.items():
            v = lowered.get(key.lower())
            values[name] = "" if v is None else str(v)
        return cls(**values)


class InventoryClient:
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

    def fetch_profile(self, serial: str) -> DeviceNetworkProfile:
        """One GET, no retry. Raises InventoryError on any failure."""

        params = {"sn": serial, "type": "json"}
        logger.debug("GET %s params=%s", self.url, params)
        try:
            resp = self.session.get(
                self.url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except RequestException as e:
            raise InventoryError(f"call url: {self.url} failed: {e}") from e

        if resp.status_code != 200:
            raise InventoryError(
                f"http status code: {resp.status_code}", status_code=resp.status_code
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise InventoryError(f"malformed inventory response: {e}") from e

        if not isinstance(body, dict):
            raise InventoryError(f"inventory response must be an object, got {type(body).__name__}")

        envelope = {str(k).lower(): v for k, v in body.items()}
        content = envelope.get("content")
        if content is not None and not isinstance(content, dict):
            raise InventoryError("inventory content must be an object")

        logger.info(
            "Inventory status=%s message=%s",
            envelope.get("status"),
            envelope.get("message"),
        )
        profile = DeviceNetworkProfile.from_content(content)
        logger.info("Profile for %s: %s", serial, profile)
        return profile
