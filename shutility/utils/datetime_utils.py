#!filepath: shutility/utils/datetime_utils.py
from __future__ import annotations

import calendar
import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

import pandas as pd

from shutility import logs
from shutility.config import settings
from shutility.utils.errors import ExternalOperationFailed, InvalidArgument

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
SECOND = timedelta(seconds=1)

IntLike = Union[int, str]


class DateUtils:
    """
    Unix 时间戳（秒）运算与格式化。

    - seconds / minutes / hours：绝对偏移
    - days / weeks：按配置时区的墙上时间偏移（跨 DST 时秒数不一定是 86400 的整数倍）
    - months / years：日历偏移，目标月份更短时取该月最后一天（1/31 + 1 月 → 2/28 或 2/29）
    """

    PARSE_FORMATS = [
        "%Y-%m-%d %H:%M:%S.%f",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d %H:%M",
        "%Y-%m-%d",
        "%Y/%m/%d %H:%M:%S.%f",
        "%Y/%m/%d %H:%M:%S",
        "%Y/%m/%d %H:%M",
        "%Y/%m/%d",
        "%Y%m%d%H%M%S",
        "%Y%m%d",
    ]

    _SHORTHAND = re.compile(r"%([%FT])")
    _SHORTHAND_MAP = {"%": "%%", "F": "%Y-%m-%d", "T": "%H:%M:%S"}

    # ================================================================
    # 内部工具
    # ================================================================
    @classmethod
    def tz(cls) -> ZoneInfo:
        return settings().date.tz

    @staticmethod
    def _int(value: IntLike, name: str) -> int:
        if isinstance(value, bool):
            raise InvalidArgument(f"{name} must be an integer, got {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")

    @classmethod
    def _to_local(cls, ts: int) -> datetime:
        try:
            return (EPOCH + timedelta(seconds=ts)).astimezone(cls.tz())
        except (OverflowError, ValueError) as e:
            raise ExternalOperationFailed(f"timestamp out of range: {ts}") from e

    @staticmethod
    def _to_ts(dt_: datetime) -> int:
        return (dt_ - EPOCH) // SECOND

    @classmethod
    def _shift(cls, ts: IntLike, n: IntLike, unit: str) -> int:
        ts = cls._int(ts, "timestamp")
        n = cls._int(n, unit)

        try:
            if unit in ("seconds", "minutes", "hours"):
                new = EPOCH + timedelta(seconds=ts) + timedelta(**{unit: n})
            elif unit in ("days", "weeks"):
                # aware datetime 加 timedelta 即墙上时间运算
                new = cls._to_local(ts) + timedelta(**{unit: n})
            elif unit == "months":
                new = cls._add_months(cls._to_local(ts), n)
            elif unit == "years":
                new = cls._add_months(cls._to_local(ts), 12 * n)
            else:
                raise InvalidArgument(f"unknown unit: {unit}")
        except (OverflowError, ValueError) as e:
            if isinstance(e, InvalidArgument):
                raise
            raise ExternalOperationFailed(f"cannot add {n} {unit} to {ts}: {e}") from e

        return cls._to_ts(new)

    @staticmethod
    def _add_months(dt_: datetime, months: int) -> datetime:
        y, m = divmod(dt_.year * 12 + dt_.month - 1 + months, 12)
        m += 1
        day = min(dt_.day, calendar.monthrange(y, m)[1])
        return dt_.replace(year=y, month=m, day=day)

    # ================================================================
    # 当前时间 / 解析 / 格式化
    # ================================================================
    @classmethod
    def now(cls) -> int:
        return cls._to_ts(datetime.now(timezone.utc))

    @classmethod
    def epoch(cls, s: Optional[str]) -> int:
        """
        任意格式日期时间字符串 → 时间戳
            "2020-07-07 18:38"
            "2020/07/07 18:38:00"
            "@1594143480"
            "Tue, 07 Jul 2020 18:38:00 +0000"   # pandas 兜底
        无时区信息时按配置时区解释
        """
        if s is None or not str(s).strip():
            raise InvalidArgument("epoch: missing datetime string")

        s = str(s).strip()
        tz = cls.tz()

        if s.startswith("@"):
            try:
                return cls._int(s[1:], "timestamp")
            except InvalidArgument as e:
                raise ExternalOperationFailed(f"invalid date: {s!r}") from e

        for fmt in cls.PARSE_FORMATS:
            try:
                return cls._to_ts(datetime.strptime(s, fmt).replace(tzinfo=tz))
            except ValueError:
                pass

        logs.debug(f"[DateUtils] strptime formats exhausted, falling back to pandas: {s!r}")
        try:
            parsed = pd.Timestamp(s)
        except (ValueError, TypeError, OverflowError) as e:
            raise ExternalOperationFailed(f"invalid date: {s!r}") from e

        if pd.isna(parsed):
            raise ExternalOperationFailed(f"invalid date: {s!r}")

        dt_ = parsed.to_pydatetime(warn=False)
        if dt_.tzinfo is None:
            dt_ = dt_.replace(tzinfo=tz)
        return cls._to_ts(dt_)

    @classmethod
    def format(cls, ts: IntLike, fmt: Optional[str] = None) -> str:
        """
        时间戳 → 字符串，默认 "%F %T"（YYYY-MM-DD HH:MM:SS）
        %F / %T 先展开，不依赖平台 strftime
        """
        ts = cls._int(ts, "timestamp")
        fmt = fmt or settings().date.default_format
        fmt = cls._SHORTHAND.sub(lambda m: cls._SHORTHAND_MAP[m.group(1)], fmt)
        try:
            return cls._to_local(ts).strftime(fmt)
        except ValueError as e:
            raise ExternalOperationFailed(f"cannot format {ts} with {fmt!r}: {e}") from e

    # ================================================================
    # add_*_to / sub_*_from
    # ================================================================
    @classmethod
    def add_seconds_to(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, n, "seconds")

    @classmethod
    def add_minutes_to(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, n, "minutes")

    @classmethod
    def add_hours_to(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, n, "hours")

    @classmethod
    def add_days_to(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, n, "days")

    @classmethod
    def add_weeks_to(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, n, "weeks")

    @classmethod
    def add_months_to(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, n, "months")

    @classmethod
    def add_years_to(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, n, "years")

    @classmethod
    def sub_seconds_from(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, -cls._int(n, "seconds"), "seconds")

    @classmethod
    def sub_minutes_from(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, -cls._int(n, "minutes"), "minutes")

    @classmethod
    def sub_hours_from(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, -cls._int(n, "hours"), "hours")

    @classmethod
    def sub_days_from(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, -cls._int(n, "days"), "days")

    @classmethod
    def sub_weeks_from(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, -cls._int(n, "weeks"), "weeks")

    @classmethod
    def sub_months_from(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, -cls._int(n, "months"), "months")

    @classmethod
    def sub_years_from(cls, ts: IntLike, n: IntLike) -> int:
        return cls._shift(ts, -cls._int(n, "years"), "years")

    # ================================================================
    # *_now：now() 与 add / sub 组合
    # ================================================================
    @classmethod
    def add_seconds_to_now(cls, n: IntLike) -> int:
        return cls.add_seconds_to(cls.now(), n)

    @classmethod
    def add_minutes_to_now(cls, n: IntLike) -> int:
        return cls.add_minutes_to(cls.now(), n)

    @classmethod
    def add_hours_to_now(cls, n: IntLike) -> int:
        return cls.add_hours_to(cls.now(), n)

    @classmethod
    def add_days_to_now(cls, n: IntLike) -> int:
        return cls.add_days_to(cls.now(), n)

    @classmethod
    def add_weeks_to_now(cls, n: IntLike) -> int:
        return cls.add_weeks_to(cls.now(), n)

    @classmethod
    def add_months_to_now(cls, n: IntLike) -> int:
        return cls.add_months_to(cls.now(), n)

    @classmethod
    def add_years_to_now(cls, n: IntLike) -> int:
        return cls.add_years_to(cls.now(), n)

    @classmethod
    def sub_seconds_from_now(cls, n: IntLike) -> int:
        return cls.sub_seconds_from(cls.now(), n)

    @classmethod
    def sub_minutes_from_now(cls, n: IntLike) -> int:
        return cls.sub_minutes_from(cls.now(), n)

    @classmethod
    def sub_hours_from_now(cls, n: IntLike) -> int:
        return cls.sub_hours_from(cls.now(), n)

    @classmethod
    def sub_days_from_now(cls, n: IntLike) -> int:
        return cls.sub_days_from(cls.now(), n)

    @classmethod
    def sub_weeks_from_now(cls, n: IntLike) -> int:
        return cls.sub_weeks_from(cls.now(), n)

    @classmethod
    def sub_months_from_now(cls, n: IntLike) -> int:
        return cls.sub_months_from(cls.now(), n)

    @classmethod
    def sub_years_from_now(cls, n: IntLike) -> int:
        return cls.sub_years_from(cls.now(), n)
