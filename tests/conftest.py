from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pytest

from firstboot_agent.config import AgentConfig
from firstboot_agent.errors import CommandError
from firstboot_agent.lib.command import CmdResult

Reply = Union[str, Tuple[int, str], Exception]


class FakeRunner:
    """Answers commands by substring match; records everything it was asked to run."""

    def __init__(self, replies: Optional[Dict[str, Reply]] = None) -> None:
        self.replies = dict(replies or {})
        self.commands: List[str] = []

    def _answer(self, command: str, check: bool) -> CmdResult:
        self.commands.append(command)
        reply: Reply = ""
        for needle, r in self.replies.items():
            if needle in command:
                reply = r
                break
        if isinstance(reply, Exception):
            raise reply
        code, text = reply if isinstance(reply, tuple) else (0, reply)
        if check and code != 0:
            raise CommandError(command, code, text)
        return CmdResult(command=command, returncode=code, output=text.encode("utf-8"), text=text)

    def execute(self, command: str, *, check: bool = True) -> CmdResult:
        return self._answer(command, check)

    def run_argv(self, argv: Sequence[str], *, check: bool = True) -> CmdResult:
        return self._answer(" ".join(argv), check)


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body)

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    def __init__(self, response: Union[FakeResponse, Exception, None] = None) -> None:
        self.response = response if response is not None else FakeResponse(200, {})
        self.calls: List[Dict[str, Any]] = []

    def _reply(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._reply("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._reply("POST", url, **kwargs)


@pytest.fixture
def make_runner():
    return FakeRunner


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def config(tmp_path) -> AgentConfig:
    return AgentConfig(
        raw={
            "paths": {"root": str(tmp_path)},
            "network": {"max_attempts": 3, "interval_seconds": 2, "settle_seconds": 30},
        }
    )
