from __future__ import annotations

import argparse
import logging
from datetime import date
from typing import Optional

from . import __version__
from .config import AgentConfig, load_config
from .errors import ReadinessTimeout
from .lib.command import CommandRunner
from .lib.inventory import InventoryClient
from .lib.progress import ProgressReporter
from .logging_utils import configure_logging
from .pipeline import PipelineResult, run_pipeline

logger = logging.getLogger(__name__)


def version_string() -> str:
    return f"v{__version__} ({date.today():%Y-%m-%d})"


def run(
    config: AgentConfig,
    *,
    log_path: Optional[str] = None,
    dry_run: bool = False,
) -> PipelineResult:
    """Provision this host once. Raises ReadinessTimeout if the network never comes up."""

    configure_logging(log_path=log_path or config.log_file, level=config.log_level)
    logger.info("firstboot-agent %s starting (dry_run=%s)", version_string(), dry_run)

    runner = CommandRunner(config.script_file, code_page=config.code_page, dry_run=dry_run)
    inventory = InventoryClient(config.inventory_url, timeout=config.http_timeout)
    reporter = ProgressReporter(config.progress_url, timeout=config.http_timeout)

    try:
        return run_pipeline(
            config=config,
            runner=runner,
            inventory=inventory,
            reporter=reporter,
            dry_run=dry_run,
        )
    except Exception:
        logger.exception("Provisioning aborted")
        raise


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="firstboot-agent")
    p.add_argument("--version", action="version", version=f"%(prog)s {version_string()}")
    p.add_argument("--config", default=None, help="Path to agent config (yaml)")
    p.add_argument("--log", default=None, help="Path to agent log (overrides config)")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")

    args = p.parse_args(argv)

    config = load_config(args.config)
    try:
        run(config, log_path=args.log, dry_run=args.dry_run)
    except ReadinessTimeout:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
