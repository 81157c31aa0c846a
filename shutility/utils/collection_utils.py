#!filepath: shutility/utils/collection_utils.py
from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, List

from shutility import logs
from shutility.utils.errors import CallbackFailed, InvalidArgument, NotFound, ShellUtilityError

Callback = Callable[[str], Any]


class CollectionUtils:
    """
    集合迭代工具：逐行读取输入（stdin / list / generator），
    对每个元素调用单参数回调，按输入顺序组合结果。

    回调抛出的任何异常都会包装为 CallbackFailed 并中止迭代；
    filter / reject 也不例外（错误不等于 False）。
    """

    # ================================================================
    # 内部工具
    # ================================================================
    @staticmethod
    def _lines(lines: Iterable[str]) -> Iterator[str]:
        if lines is None:
            raise InvalidArgument("collection: missing input")
        if isinstance(lines, str):
            lines = lines.splitlines()
        for line in lines:
            # 等价于 read -r：只去掉行尾换行符
            if line.endswith("\r\n"):
                yield line[:-2]
            elif line.endswith("\n"):
                yield line[:-1]
            else:
                yield line

    @staticmethod
    def _require(fn: Callback, op: str) -> None:
        if not callable(fn):
            raise InvalidArgument(f"{op}: callback is not callable: {fn!r}")

    @staticmethod
    def _call(fn: Callback, item: Any, op: str) -> Any:
        try:
            return fn(item)
        except Exception as e:
            # CommandFailed 自带退出码，透传给 CLI
            exit_code = e.exit_code if isinstance(e, ShellUtilityError) else None
            logs.debug(f"[{op}] callback failed on {item!r}: {e}")
            raise CallbackFailed(
                f"{op}: callback failed on {item!r}: {e}",
                item=item,
                cause=e,
                exit_code=exit_code,
            ) from e

    # ================================================================
    # 副作用 / 变换
    # ================================================================
    @classmethod
    def each(cls, fn: Callback, lines: Iterable[str]) -> None:
        cls._require(fn, "each")
        for it in cls._lines(lines):
            cls._call(fn, it, "each")

    @classmethod
    def map(cls, fn: Callback, lines: Iterable[str]) -> List[Any]:
        cls._require(fn, "map")
        return [cls._call(fn, it, "map") for it in cls._lines(lines)]

    @classmethod
    def invoke(cls, fn: Callable[..., Any], lines: Iterable[str]) -> Any:
        """
        先收集全部元素，再以位置参数一次性调用 fn
        """
        cls._require(fn, "invoke")
        args = list(cls._lines(lines))
        try:
            return fn(*args)
        except Exception as e:
            exit_code = e.exit_code if isinstance(e, ShellUtilityError) else None
            raise CallbackFailed(
                f"invoke: callback failed: {e}", item=args, cause=e, exit_code=exit_code
            ) from e

    # ================================================================
    # 过滤
    # ================================================================
    @classmethod
    def filter(cls, fn: Callback, lines: Iterable[str]) -> List[str]:
        cls._require(fn, "filter")
        return [it for it in cls._lines(lines) if cls._call(fn, it, "filter")]

    @classmethod
    def reject(cls, fn: Callback, lines: Iterable[str]) -> List[str]:
        cls._require(fn, "reject")
        return [it for it in cls._lines(lines) if not cls._call(fn, it, "reject")]

    # ================================================================
    # 短路判断
    # ================================================================
    @classmethod
    def every(cls, fn: Callback, lines: Iterable[str]) -> bool:
        cls._require(fn, "every")
        for it in cls._lines(lines):
            if not cls._call(fn, it, "every"):
                return False
        return True

    @classmethod
    def some(cls, fn: Callback, lines: Iterable[str]) -> bool:
        cls._require(fn, "some")
        for it in cls._lines(lines):
            if cls._call(fn, it, "some"):
                return True
        return False

    @classmethod
    def find(cls, fn: Callback, lines: Iterable[str]) -> str:
        cls._require(fn, "find")
        for it in cls._lines(lines):
            if cls._call(fn, it, "find"):
                return it
        raise NotFound("find: no element satisfies the predicate")
