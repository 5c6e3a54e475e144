from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..errors import ExtractionMiss
from .command import Executor
from .extract import extract
from .inventory import DeviceNetworkProfile

logger = logging.getLogger(__name__)

SERIAL_PATTERN = r"SerialNumber=(.+)"
INTERFACE_INDEX_PATTERN = r"InterfaceIndex=(.*)"
DNS_PATTERN = r"Address:[ \t]*(.+)"
CAPTION_PATTERN = r"Caption=(.*)"


@dataclass(frozen=True)
class HostFacts:
    """Values resolved once at the start of a run. Empty when a lookup failed."""

    serial: str = ""
    profile: DeviceNetworkProfile = field(default_factory=DeviceNetworkProfile)
    adapter_index: str = ""
    dns: str = ""


def _lookup(runner: Executor, command: str, pattern: str, what: str) -> str:
    r = runner.execute(command)
    value = (extract(pattern, r.text) or "").strip()
    if not value:
        raise ExtractionMiss(f"get {what} failed")
    return value


def get_serial_number(runner: Executor) -> str:
    sn = _lookup(runner, "wmic bios get SerialNumber /VALUE", SERIAL_PATTERN, "sn")
    logger.info("Serial number: %s", sn)
    return sn


def get_adapter_index(runner: Executor, mac: str) -> str:
    cmd = f'wmic nic where (MACAddress="{mac}" AND netConnectionStatus=2) get InterfaceIndex /value'
    index = _lookup(runner, cmd, INTERFACE_INDEX_PATTERN, "nic interface index")
    logger.info("Nic Interface Index: %s", index)
    return index


def get_dns_address(runner: Executor) -> str:
    dns = _lookup(runner, "echo | nslookup", DNS_PATTERN, "dns")
    logger.info("Current DNS: %s", dns)
    return dns


def get_domain_caption(runner: Executor) -> str:
    try:
        return _lookup(runner, "wmic ntdomain get Caption /value", CAPTION_PATTERN, "caption")
    except ExtractionMiss as e:
        raise ExtractionMiss("caption not found") from e
