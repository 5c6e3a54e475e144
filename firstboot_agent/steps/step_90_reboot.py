from __future__ import annotations

import logging

from ..context import StepContext

logger = logging.getLogger(__name__)

REBOOT_DELAY_SECONDS = 10


class RebootStep:
    step_id = "90_reboot"

    def run(self, ctx: StepContext) -> None:
        logger.info("Rebooting in %d seconds", REBOOT_DELAY_SECONDS)
        ctx.runner.execute(f"shutdown -f -r -t {REBOOT_DELAY_SECONDS}")
