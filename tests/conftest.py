"""
Shared fixtures: a recording command runner, a probe over a set of
"installed" commands, and a printer that writes to a buffer
"""
import subprocess
from io import StringIO
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence

import pytest
from rich.console import Console

from lazyboot.config import LazybootConfig
from lazyboot.console import Printer
from lazyboot.platform.detector import PlatformDetector
from lazyboot.platform.probe import CommandProbe
from lazyboot.platform.tools import EXTRAS, PREREQUISITES


def contains(cmd: Sequence[str], words: Sequence[str]) -> bool:
    """True when `words` appear contiguously in `cmd`"""
    words = list(words)
    size = len(words)
    return any(list(cmd[i:i + size]) == words for i in range(len(cmd) - size + 1))


class FakeRunner:
    """Stands in for subprocess.run and records every command"""

    def __init__(self):
        self.calls: List[List[str]] = []
        self._failures: Dict[tuple, int] = {}
        self._outputs: Dict[tuple, str] = {}
        self._effects: List[tuple] = []

    def fail(self, *words: str, returncode: int = 1):
        self._failures[words] = returncode

    def respond(self, *words: str, stdout: str):
        self._outputs[words] = stdout

    def on(self, *words: str, effect: Callable[[], None]):
        self._effects.append((words, effect))

    def __call__(self, cmd, **kwargs):
        cmd = list(cmd)
        self.calls.append(cmd)

        for words, returncode in self._failures.items():
            if contains(cmd, words):
                return subprocess.CompletedProcess(cmd, returncode, stdout='', stderr='simulated failure')

        for words, effect in self._effects:
            if contains(cmd, words):
                effect()

        stdout = ''
        for words, output in self._outputs.items():
            if contains(cmd, words):
                stdout = output
        return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr='')

    def ran(self, *words: str) -> bool:
        return any(contains(cmd, words) for cmd in self.calls)

    def count(self, *words: str) -> int:
        return sum(1 for cmd in self.calls if contains(cmd, words))


class FakeProbe(CommandProbe):
    """Probe over a mutable set of command names"""

    def __init__(self, present: Iterable[str] = (), versions: Optional[Dict[str, str]] = None):
        super().__init__()
        self.present = set(present)
        self.versions = dict(versions or {})

    def add(self, *names: str):
        self.present.update(names)

    def locate(self, *names: str) -> Optional[str]:
        for name in names:
            if name in self.present:
                return f"/usr/bin/{name}"
        return None

    def version(self, *names: str) -> Optional[str]:
        for name in names:
            if name in self.present:
                return self.versions.get(name)
        return None


class Answers:
    """Scripted confirmation prompts; unanswered prompts are declined"""

    def __init__(self, *answers: bool):
        self.answers = list(answers)
        self.prompts: List[str] = []

    def __call__(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answers.pop(0) if self.answers else False


def every_command() -> List[str]:
    """One command per catalog tool, enough to satisfy all of them"""
    return [tool.commands[0] for tool in PREREQUISITES + EXTRAS] + ['apt', 'dnf', 'pacman', 'brew', 'npm']


def output_of(printer: Printer) -> str:
    return printer.console.file.getvalue()


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def printer():
    console = Console(file=StringIO(), width=160, color_system=None, highlight=False)
    return Printer(console, debug=True)


@pytest.fixture
def config(tmp_path):
    """Defaults, with the font directory moved under tmp_path"""
    return LazybootConfig(font_directory=str(tmp_path / 'fonts'))


@pytest.fixture
def os_release(tmp_path):
    """Write an os-release file and return a detector reading it"""
    def _create(content: str) -> PlatformDetector:
        path = tmp_path / 'os-release'
        path.write_text(content, encoding='utf-8')
        return PlatformDetector(system='Linux', os_release=path)
    return _create
