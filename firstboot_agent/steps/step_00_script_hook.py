from __future__ import annotations

import logging
from pathlib import Path

from ..context import StepContext

logger = logging.getLogger(__name__)


class ScriptHookStep:
    """Run an operator-supplied script if it is present."""

    def __init__(self, step_id: str, script_path: str) -> None:
        self.step_id = step_id
        self.script_path = script_path

    def present(self) -> bool:
        return Path(self.script_path).is_file()

    def run(self, ctx: StepContext) -> None:
        if not self.present():
            logger.info("No %s script at %s", self.step_id, self.script_path)
            return
        ctx.runner.run_argv(["cmd.exe", "/c", self.script_path])
