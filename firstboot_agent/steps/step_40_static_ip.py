from __future__ import annotations

import logging

from ..context import StepContext

logger = logging.getLogger(__name__)


class StaticIpStep:
    step_id = "40_static_ip"

    def run(self, ctx: StepContext) -> None:
        p = ctx.facts.profile
        ctx.runner.execute(
            f'netsh interface ipv4 set address name="{ctx.facts.adapter_index}" '
            f"source=static addr={p.ip} mask={p.netmask} gateway={p.gateway}"
        )
        logger.info("Static address %s/%s gw %s applied", p.ip, p.netmask, p.gateway)


class StaticDnsStep:
    step_id = "45_static_dns"

    def run(self, ctx: StepContext) -> None:
        ctx.runner.execute(
            f'netsh interface ipv4 set dnsservers name="{ctx.facts.adapter_index}" '
            f"static {ctx.facts.dns} primary"
        )
