from __future__ import annotations

import logging

from ..context import StepContext
from ..errors import CommandError, StepError

logger = logging.getLogger(__name__)

WINLOGON_KEY = r"HKEY_LOCAL_MACHINE\SOFTWARE\Microsoft\Windows NT\CurrentVersion\Winlogon"

REGISTRY_COMMANDS = [
    # no more automatic logon after the deployment account
    f'reg add "{WINLOGON_KEY}" /v AutoAdminLogon /t reg_sz /d 0 /f',
    f'reg add "{WINLOGON_KEY}" /v Defaultpassword /t reg_sz /d "" /f',
]


class RegistryStep:
    step_id = "60_registry"

    def run(self, ctx: StepContext) -> None:
        failures = []
        for cmd in REGISTRY_COMMANDS:
            try:
                ctx.runner.execute(cmd)
            except CommandError as e:
                logger.error("registry edit failed: %s", e)
                failures.append(cmd)

        if failures:
            raise StepError(f"{len(failures)} of {len(REGISTRY_COMMANDS)} registry edits failed")
