from __future__ import annotations

import enum
import functools
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, TypeVar

from .config import AgentConfig
from .context import StepContext
from .errors import AgentError, ReadinessTimeout
from .lib.command import Executor
from .lib.host import HostFacts, get_adapter_index, get_dns_address, get_serial_number
from .lib.inventory import DeviceNetworkProfile, InventoryClient
from .lib.net import ping, wait_reachable
from .lib.progress import ProgressEvent, ProgressReporter
from .steps import (
    PartitionDiskStep,
    RebootStep,
    RegistryStep,
    RenameHostStep,
    ScriptHookStep,
    StaticDnsStep,
    StaticIpStep,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Step(Protocol):
    """A single configuration action. Raises AgentError on failure."""

    step_id: str

    def run(self, ctx: StepContext) -> None:
        ...


class Severity(str, enum.Enum):
    FATAL = "fatal"
    ADVISORY = "advisory"


PRE_INSTALL = "00_pre_install"
NETWORK_GATE = "10_network_gate"
SERIAL_NUMBER = "11_serial_number"
INVENTORY = "12_inventory"
ADAPTER_INDEX = "13_adapter_index"
DNS_ADDRESS = "14_dns_address"
NETWORK_REGATE = "50_network_regate"
POST_INSTALL = "95_post_install"

# Losing the provisioning network is unrecoverable; anything else can be
# fixed by hand on a host that still reboots.
STEP_POLICY: Dict[str, Severity] = {
    PRE_INSTALL: Severity.ADVISORY,
    NETWORK_GATE: Severity.FATAL,
    SERIAL_NUMBER: Severity.ADVISORY,
    INVENTORY: Severity.ADVISORY,
    ADAPTER_INDEX: Severity.ADVISORY,
    DNS_ADDRESS: Severity.ADVISORY,
    PartitionDiskStep.step_id: Severity.ADVISORY,
    RenameHostStep.step_id: Severity.ADVISORY,
    StaticIpStep.step_id: Severity.ADVISORY,
    StaticDnsStep.step_id: Severity.ADVISORY,
    NETWORK_REGATE: Severity.FATAL,
    RegistryStep.step_id: Severity.ADVISORY,
    POST_INSTALL: Severity.ADVISORY,
    RebootStep.step_id: Severity.ADVISORY,
}

PARTITIONED = ProgressEvent(0.70, "partition disk", "diskpart")
HOSTNAME_CHANGED = ProgressEvent(0.75, "change hostname", "change hostname")
NETWORK_CHANGED = ProgressEvent(0.80, "change network", "change network")
REGISTRY_CHANGED = ProgressEvent(0.90, "change registry", "change reg")
FINISHED = ProgressEvent(1.00, "install finished", "finish")


@dataclass(frozen=True)
class StepOutcome:
    step_id: str
    ok: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class PipelineResult:
    facts: HostFacts
    outcomes: List[StepOutcome]

    @property
    def ran_steps(self) -> List[str]:
        return [o.step_id for o in self.outcomes]

    @property
    def failed_steps(self) -> List[str]:
        return [o.step_id for o in self.outcomes if not o.ok]


def run_pipeline(
    *,
    config: AgentConfig,
    runner: Executor,
    inventory: InventoryClient,
    reporter: ProgressReporter,
    probe: Optional[Callable[[str], bool]] = None,
    sleep: Callable[[float], None] = time.sleep,
    dry_run: bool = False,
) -> PipelineResult:
    """Provision the host from first boot to reboot.

    Only a readiness-gate timeout stops the run (ReadinessTimeout is raised);
    every other failure is logged, recorded and the run carries on.
    """

    if probe is None:
        probe = functools.partial(ping, runner=runner)

    outcomes: List[StepOutcome] = []

    def attempt(step_id: str, fn: Callable[[], T], default: T) -> T:
        logger.info("Running step %s", step_id)
        try:
            value = fn()
        except AgentError as e:
            outcomes.append(StepOutcome(step_id=step_id, ok=False, error=str(e)))
            if STEP_POLICY[step_id] is Severity.FATAL:
                logger.error("Step %s failed, aborting: %s", step_id, e)
                raise
            logger.error("Step %s failed, continuing: %s", step_id, e)
            return default
        outcomes.append(StepOutcome(step_id=step_id, ok=True))
        return value

    def gate() -> None:
        if not wait_reachable(
            config.probe_host,
            config.max_attempts,
            config.interval_seconds,
            probe=probe,
            sleep=sleep,
        ):
            raise ReadinessTimeout(config.probe_host, config.max_attempts)

    def run_step(step: Step, ctx: StepContext) -> None:
        attempt(step.step_id, lambda: step.run(ctx), None)

    pre = ScriptHookStep(PRE_INSTALL, config.pre_install_script)
    if pre.present():
        run_step(pre, StepContext(config=config, runner=runner, dry_run=dry_run))

    attempt(NETWORK_GATE, gate, None)

    serial = attempt(SERIAL_NUMBER, lambda: get_serial_number(runner), "")
    profile = attempt(INVENTORY, lambda: inventory.fetch_profile(serial), DeviceNetworkProfile())
    adapter_index = attempt(ADAPTER_INDEX, lambda: get_adapter_index(runner, profile.hwaddr), "")
    dns = attempt(DNS_ADDRESS, lambda: get_dns_address(runner), "")

    facts = HostFacts(serial=serial, profile=profile, adapter_index=adapter_index, dns=dns)
    ctx = StepContext(config=config, runner=runner, facts=facts, dry_run=dry_run)

    run_step(PartitionDiskStep(), ctx)
    reporter.send(PARTITIONED, serial)

    run_step(RenameHostStep(), ctx)
    reporter.send(HOSTNAME_CHANGED, serial)

    run_step(StaticIpStep(), ctx)
    run_step(StaticDnsStep(), ctx)
    logger.info("Waiting %.0fs for the new addressing to settle", config.settle_seconds)
    sleep(config.settle_seconds)
    attempt(NETWORK_REGATE, gate, None)
    reporter.send(NETWORK_CHANGED, serial)

    run_step(RegistryStep(), ctx)
    reporter.send(REGISTRY_CHANGED, serial)

    reporter.send(FINISHED, serial)

    post = ScriptHookStep(POST_INSTALL, config.post_install_script)
    if post.present():
        run_step(post, ctx)

    run_step(RebootStep(), ctx)

    result = PipelineResult(facts=facts, outcomes=outcomes)
    if result.failed_steps:
        logger.warning("Finished with failed steps: %s", ", ".join(result.failed_steps))
    return result
