#!filepath: shutility/utils/command.py
from __future__ import annotations

import os
import shlex
import subprocess
from typing import List, Optional

from shutility import logs
from shutility.utils.errors import CommandFailed, InvalidArgument

# 命令中出现任意 "$" 即走表达式模式（$it、$((it + 1))、$HOME 等）
_EXPR_MARKER = "$"


class CommandCallback:
    """
    把 shell 命令字符串包装成 collection 可用的回调。

    两种调用约定：
        "test -n"             → 位置参数模式：["test", "-n", item]，不经过 shell
        '[[ $it == "a" ]]'    → 表达式模式：bash -c，元素通过环境变量 it 传入

    退出码 0 视为 True / 成功。
    """

    def __init__(self, command: str, timeout: Optional[float] = None, shell: str = "bash"):
        if not command or not command.strip():
            raise InvalidArgument("command callback: empty command")
        self.command = command
        self.timeout = timeout
        self.shell = shell
        self.expression = _EXPR_MARKER in command

    def __repr__(self) -> str:
        mode = "expression" if self.expression else "positional"
        return f"CommandCallback({self.command!r}, mode={mode})"

    # ---------------------------------------------------------------
    # 构造参数
    # ---------------------------------------------------------------
    def _argv(self, items: List[str]) -> List[str]:
        return shlex.split(self.command) + list(items)

    def _run(self, item: str, capture: bool) -> subprocess.CompletedProcess:
        if self.expression:
            argv = [self.shell, "-c", self.command]
            env = {**os.environ, "it": item}
        else:
            argv = self._argv([item])
            env = None
        return self._exec(argv, env, capture)

    def _exec(self, argv: List[str], env, capture: bool) -> subprocess.CompletedProcess:
        logs.debug(f"[CommandCallback] run {argv}")
        try:
            return subprocess.run(
                argv,
                env=env,
                capture_output=capture,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise CommandFailed(f"command not found: {argv[0]}", exit_code=127) from e
        except subprocess.TimeoutExpired as e:
            raise CommandFailed(f"command timed out after {self.timeout}s: {self.command}") from e

    @staticmethod
    def _check(proc: subprocess.CompletedProcess, command: str) -> None:
        if proc.returncode != 0:
            raise CommandFailed(
                f"command exited {proc.returncode}: {command}",
                exit_code=proc.returncode,
            )

    @staticmethod
    def _strip_newline(out: str) -> str:
        return out[:-1] if out.endswith("\n") else out

    # ---------------------------------------------------------------
    # 回调形态
    # ---------------------------------------------------------------
    def predicate(self, item: str) -> bool:
        proc = self._run(item, capture=True)
        return proc.returncode == 0

    def transform(self, item: str) -> str:
        proc = self._run(item, capture=True)
        self._check(proc, self.command)
        return self._strip_newline(proc.stdout)

    def effect(self, item: str) -> None:
        # stdout 直接继承，输出即结果
        proc = self._run(item, capture=False)
        self._check(proc, self.command)

    def invoke(self, *items: str) -> str:
        proc = self._exec(self._argv(list(items)), None, capture=True)
        self._check(proc, self.command)
        return proc.stdout
