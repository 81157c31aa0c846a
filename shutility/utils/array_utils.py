#!filepath: shutility/utils/array_utils.py
from __future__ import annotations

import locale
import random
from typing import List, Optional, Sequence, Union

from shutility import logs
from shutility.config import settings, Collation
from shutility.utils.errors import ExternalOperationFailed, InvalidArgument

Item = Union[str, int]


class ArrayUtils:
    """
    数组工具（纯函数，输入均为有序字符串序列，不修改输入）
    """

    # ================================================================
    # 查询
    # ================================================================
    @classmethod
    def contains(cls, needle: str, items: Optional[Sequence[str]]) -> bool:
        """
        needle 与任一元素完全相等（字符串比较，无归一化）即为 True
        """
        if items is None:
            raise InvalidArgument("contains: missing haystack")
        return any(elem == needle for elem in items)

    @classmethod
    def is_empty(cls, items: Sequence[str]) -> bool:
        return len(items) == 0

    @classmethod
    def random_element(cls, items: Sequence[str]) -> str:
        if not items:
            raise InvalidArgument("random_element: no elements")
        return items[random.randrange(len(items))]

    # ================================================================
    # 变换
    # ================================================================
    @classmethod
    def dedupe(cls, items: Sequence[str]) -> List[str]:
        """
        保留首次出现顺序；空字符串一律丢弃
        """
        seen = set()
        uniq: List[str] = []
        for el in items:
            if el == "" or el in seen:
                continue
            seen.add(el)
            uniq.append(el)
        return uniq

    @classmethod
    def join(cls, glue: str, items: Sequence[str]) -> str:
        if glue is None:
            raise InvalidArgument("join: missing glue")
        return glue.join(items)

    @classmethod
    def reverse(cls, items: Sequence[str]) -> List[str]:
        arr = list(items)
        head, tail = 0, len(arr) - 1
        while head < tail:
            arr[head], arr[tail] = arr[tail], arr[head]
            head += 1
            tail -= 1
        return arr

    @classmethod
    def merge(cls, first: Sequence[str], second: Sequence[str]) -> List[str]:
        if first is None or second is None:
            raise InvalidArgument("merge: needs two sequences")
        return [*first, *second]

    # ================================================================
    # 排序
    # ================================================================
    @classmethod
    def _sort_key(cls):
        # str 比较按码点，等价于 UTF-8 字节序
        collation = settings().array.collation
        if collation is Collation.LOCALE:
            # Python 启动时 LC_COLLATE 固定为 "C"，需按环境变量（LC_ALL / LC_COLLATE / LANG）设置
            try:
                current = locale.setlocale(locale.LC_COLLATE, "")
            except locale.Error as e:
                raise ExternalOperationFailed(f"sort: unsupported host locale: {e}") from e
            logs.debug(f"[ArrayUtils] sorting with locale collation: {current}")
            return locale.strxfrm
        return None

    @classmethod
    def sort(cls, items: Sequence[str]) -> List[str]:
        return sorted(items, key=cls._sort_key())

    @classmethod
    def rsort(cls, items: Sequence[str]) -> List[str]:
        return sorted(items, key=cls._sort_key(), reverse=True)

    @classmethod
    def bsort(cls, items: Sequence[Item]) -> List[Item]:
        """
        整数升序排序（数值比较）。
        元素可为 int 或可解析为整数的字符串，返回原始元素。
        非整数元素直接报错。
        """
        keyed = []
        for el in items:
            if isinstance(el, bool) or not isinstance(el, (int, str)):
                raise InvalidArgument(f"bsort: not an integer: {el!r}")
            try:
                keyed.append((int(el), el))
            except (TypeError, ValueError) as e:
                raise InvalidArgument(f"bsort: not an integer: {el!r}") from e

        keyed.sort(key=lambda pair: pair[0])
        return [el for _, el in keyed]
