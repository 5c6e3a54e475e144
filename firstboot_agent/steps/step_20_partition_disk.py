from __future__ import annotations

import logging
from pathlib import Path

from ..context import StepContext
from ..errors import StepError

logger = logging.getLogger(__name__)

# Single-disk targets only: always disk 0.
DISKPART_SCRIPT = "\r\n".join(
    [
        "select disk 0",
        "create partition extended",
        "create partition logical",
        "assign",
        "format fs=ntfs quick",
    ]
)


class PartitionDiskStep:
    step_id = "20_partition_disk"

    def run(self, ctx: StepContext) -> None:
        script = Path(ctx.config.diskpart_file)
        logger.debug("diskpart script:\n%s", DISKPART_SCRIPT)

        if ctx.dry_run:
            logger.info("Would write %s", script)
        else:
            try:
                script.parent.mkdir(parents=True, exist_ok=True)
                if script.exists():
                    script.unlink()
                script.write_text(DISKPART_SCRIPT, encoding="ascii")
            except OSError as e:
                raise StepError(f"cannot write diskpart script {script}: {e}") from e

        ctx.runner.run_argv(["diskpart", "/s", str(script)])
        logger.info("Partitioned disk 0 (extended + logical NTFS)")
