from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_ROOT = "c:/firstboot"
DEFAULT_INVENTORY_URL = "http://osinstall./api/osinstall/v1/device/getNetworkBySn"
DEFAULT_PROGRESS_URL = "http://osinstall./api/osinstall/v1/report/deviceInstallInfo"


@dataclass(frozen=True)
class AgentConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    def _value(self, section: str, key: str, default: Any) -> Any:
        # Numbers: an explicit 0 is a setting, only a missing key falls back.
        value = self._section(section).get(key)
        return default if value is None else value

    @property
    def root_path(self) -> str:
        return str(self._section("paths").get("root") or DEFAULT_ROOT)

    def _under_root(self, name: str) -> str:
        # Windows paths with forward slashes; posixpath keeps them that way on any host.
        return posixpath.join(self.root_path, name)

    @property
    def script_file(self) -> str:
        return self._under_root("temp-script.cmd")

    @property
    def diskpart_file(self) -> str:
        return self._under_root("disk.txt")

    @property
    def pre_install_script(self) -> str:
        return self._under_root("preInstall.cmd")

    @property
    def post_install_script(self) -> str:
        return self._under_root("postInstall.cmd")

    @property
    def log_level(self) -> str:
        return str(self._section("logger").get("level") or "info")

    @property
    def log_file(self) -> str:
        return str(self._section("logger").get("log_file") or self._under_root("firstboot-agent.log"))

    @property
    def inventory_url(self) -> str:
        return str(self._section("inventory").get("url") or DEFAULT_INVENTORY_URL)

    @property
    def http_timeout(self) -> float:
        return float(self._value("inventory", "timeout_seconds", 10))

    @property
    def progress_url(self) -> str:
        return str(self._section("progress").get("url") or DEFAULT_PROGRESS_URL)

    @property
    def probe_host(self) -> str:
        return str(self._section("network").get("probe_host") or "osinstall.")

    @property
    def max_attempts(self) -> int:
        return int(self._value("network", "max_attempts", 300))

    @property
    def interval_seconds(self) -> float:
        return float(self._value("network", "interval_seconds", 2))

    @property
    def settle_seconds(self) -> float:
        return float(self._value("network", "settle_seconds", 30))

    @property
    def code_page(self) -> str:
        return str(self._section("encoding").get("code_page") or "gbk")


def load_config(path: Optional[str]) -> AgentConfig:
    if path is None:
        return AgentConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("agent config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the agent config") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError("agent config must contain a mapping/object")

    return AgentConfig(raw=raw)
