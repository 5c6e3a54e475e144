from __future__ import annotations

import logging

from ..context import StepContext
from ..lib.host import get_domain_caption

logger = logging.getLogger(__name__)


class RenameHostStep:
    step_id = "30_rename_host"

    def run(self, ctx: StepContext) -> None:
        old_name = get_domain_caption(ctx.runner)
        new_name = ctx.facts.profile.hostname
        logger.info("Renaming host %s -> %s", old_name, new_name)
        ctx.runner.execute(f"netdom renamecomputer {old_name} /newname:{new_name} /force")
