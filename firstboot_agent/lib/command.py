from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence, Tuple

from ..errors import CommandError

logger = logging.getLogger(__name__)

DEFAULT_INTERPRETER: Tuple[str, ...] = ("cmd.exe", "/c")


@dataclass(frozen=True)
class CmdResult:
    command: str
    returncode: int
    output: bytes
    text: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class Executor(Protocol):
    """What steps need from a command runner."""

    def execute(self, command: str, *, check: bool = True) -> CmdResult:
        ...

    def run_argv(self, argv: Sequence[str], *, check: bool = True) -> CmdResult:
        ...


def decode_output(raw: bytes, code_page: str) -> str:
    """Native console bytes -> text. Never raises on bad bytes."""

    return raw.decode(code_page, errors="replace")


def encode_command(text: str, code_page: str) -> bytes:
    return text.encode(code_page, errors="replace")


class CommandRunner:
    """Runs commands through a script file and the platform interpreter.

    The script file is truncated for every command, so calls must not overlap.
    """

    def __init__(
        self,
        script_path: str,
        *,
        code_page: str = "gbk",
        interpreter: Sequence[str] = DEFAULT_INTERPRETER,
        dry_run: bool = False,
    ) -> None:
        self.script_path = script_path
        self.code_page = code_page
        self.interpreter = tuple(interpreter)
        self.dry_run = dry_run

    def execute(self, command: str, *, check: bool = True) -> CmdResult:
        logger.info("CMD %s", command)
        if self.dry_run:
            return CmdResult(command=command, returncode=0, output=b"", text="")

        p = Path(self.script_path)
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(encode_command("@echo off\r\n" + command + "\r\n", self.code_page))
        except OSError as e:
            raise CommandError(command, None, f"cannot write {p}: {e}") from e

        return self._spawn([*self.interpreter, str(p)], command, check=check)

    def run_argv(self, argv: Sequence[str], *, check: bool = True) -> CmdResult:
        argv_list = list(argv)
        command = " ".join(argv_list)
        logger.info("CMD %s", command)
        if self.dry_run:
            return CmdResult(command=command, returncode=0, output=b"", text="")
        return self._spawn(argv_list, command, check=check)

    def _spawn(self, argv: list[str], command: str, *, check: bool) -> CmdResult:
        try:
            p = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                env=dict(os.environ),
            )
        except OSError as e:
            raise CommandError(command, None, str(e)) from e

        output = p.stdout or b""
        text = decode_output(output, self.code_page)
        if text:
            logger.debug("OUTPUT %s", text.strip())

        if check and p.returncode != 0:
            raise CommandError(command, p.returncode, text)

        return CmdResult(command=command, returncode=p.returncode, output=output, text=text)
