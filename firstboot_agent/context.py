from __future__ import annotations

from dataclasses import dataclass, field

from .config import AgentConfig
from .lib.command import Executor
from .lib.host import HostFacts


@dataclass(frozen=True)
class StepContext:
    config: AgentConfig
    runner: Executor
    facts: HostFacts = field(default_factory=HostFacts)
    dry_run: bool = False
