#!filepath: shutility/cli.py
from enum import Enum
from functools import wraps
from typing import Iterable, List, Optional

import typer
from rich.console import Console

from shutility import (
    __version__,
    logs,
    AppConfig,
    configure,
    ArrayUtils,
    CollectionUtils,
    DateUtils,
    CommandCallback,
    ErrorKind,
    InvalidArgument,
    ShellUtilityError,
)

app = typer.Typer(help="shutility: array / collection / date helpers")
array_app = typer.Typer(help="Array operations (items are positional arguments)")
collection_app = typer.Typer(help="Iterate stdin lines through a command callback")
date_app = typer.Typer(help="Unix timestamp arithmetic and formatting")

app.add_typer(array_app, name="array")
app.add_typer(collection_app, name="collection")
app.add_typer(date_app, name="date")

err_console = Console(stderr=True)


class Unit(str, Enum):
    seconds = "seconds"
    minutes = "minutes"
    hours = "hours"
    days = "days"
    weeks = "weeks"
    months = "months"
    years = "years"


# ================================================================
# 公共工具
# ================================================================
def exit_codes(func):
    """
    ShellUtilityError → 退出码（0 成功 / 1 操作失败 / 2 用法错误）
    """
    traced = logs.catch(msg="command failed", log_inputs=True)(func)

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return traced(*args, **kwargs)
        except ShellUtilityError as e:
            err_console.print(str(e), style="red", markup=False, highlight=False)
            raise typer.Exit(code=e.exit_code)

    return wrapper


def _emit(lines: Iterable) -> None:
    for line in lines:
        typer.echo(line)


def _status(flag: bool) -> None:
    if not flag:
        raise typer.Exit(code=ErrorKind.PREDICATE_FALSE.exit_code)


def _require_items(items: Optional[List[str]], op: str) -> List[str]:
    if not items:
        raise InvalidArgument(f"{op}: missing arguments")
    return items


def _stdin():
    return typer.get_text_stream("stdin")


@app.callback()
def main(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="YAML config path"),
):
    if config:
        configure(AppConfig.load(config))


@app.command()
def version():
    typer.echo(f"v{__version__}")


# ================================================================
# array
# ================================================================
@array_app.command("contains")
@exit_codes
def array_contains(
    needle: str,
    items: Optional[List[str]] = typer.Argument(None),
):
    _status(ArrayUtils.contains(needle, _require_items(items, "contains")))


@array_app.command("dedupe")
@exit_codes
def array_dedupe(items: Optional[List[str]] = typer.Argument(None)):
    _emit(ArrayUtils.dedupe(_require_items(items, "dedupe")))


@array_app.command("is-empty")
@exit_codes
def array_is_empty(items: Optional[List[str]] = typer.Argument(None)):
    _status(ArrayUtils.is_empty(items or []))


@array_app.command("join")
@exit_codes
def array_join(glue: str, items: Optional[List[str]] = typer.Argument(None)):
    typer.echo(ArrayUtils.join(glue, _require_items(items, "join")))


@array_app.command("reverse")
@exit_codes
def array_reverse(items: Optional[List[str]] = typer.Argument(None)):
    _emit(ArrayUtils.reverse(_require_items(items, "reverse")))


@array_app.command("random-element")
@exit_codes
def array_random_element(items: Optional[List[str]] = typer.Argument(None)):
    typer.echo(ArrayUtils.random_element(items or []))


@array_app.command("sort")
@exit_codes
def array_sort(items: Optional[List[str]] = typer.Argument(None)):
    _emit(ArrayUtils.sort(_require_items(items, "sort")))


@array_app.command("rsort")
@exit_codes
def array_rsort(items: Optional[List[str]] = typer.Argument(None)):
    _emit(ArrayUtils.rsort(_require_items(items, "rsort")))


@array_app.command("bsort")
@exit_codes
def array_bsort(items: Optional[List[str]] = typer.Argument(None)):
    _emit(ArrayUtils.bsort(_require_items(items, "bsort")))


@array_app.command("merge")
@exit_codes
def array_merge(
    first: typer.FileText = typer.Argument(..., help="File with one item per line ('-' for stdin)"),
    second: typer.FileText = typer.Argument(..., help="File with one item per line"),
):
    _emit(ArrayUtils.merge(first.read().splitlines(), second.read().splitlines()))


# ================================================================
# collection（stdin 逐行输入）
# ================================================================
TimeoutOption = typer.Option(None, "--timeout", help="Per-call timeout in seconds")


@collection_app.command("each")
@exit_codes
def collection_each(command: str, timeout: Optional[float] = TimeoutOption):
    CollectionUtils.each(CommandCallback(command, timeout).effect, _stdin())


@collection_app.command("every")
@exit_codes
def collection_every(command: str, timeout: Optional[float] = TimeoutOption):
    _status(CollectionUtils.every(CommandCallback(command, timeout).predicate, _stdin()))


@collection_app.command("filter")
@exit_codes
def collection_filter(command: str, timeout: Optional[float] = TimeoutOption):
    _emit(CollectionUtils.filter(CommandCallback(command, timeout).predicate, _stdin()))


@collection_app.command("find")
@exit_codes
def collection_find(command: str, timeout: Optional[float] = TimeoutOption):
    typer.echo(CollectionUtils.find(CommandCallback(command, timeout).predicate, _stdin()))


@collection_app.command("invoke")
@exit_codes
def collection_invoke(command: str, timeout: Optional[float] = TimeoutOption):
    out = CollectionUtils.invoke(CommandCallback(command, timeout).invoke, _stdin())
    typer.echo(out, nl=False)


@collection_app.command("map")
@exit_codes
def collection_map(command: str, timeout: Optional[float] = TimeoutOption):
    _emit(CollectionUtils.map(CommandCallback(command, timeout).transform, _stdin()))


@collection_app.command("reject")
@exit_codes
def collection_reject(command: str, timeout: Optional[float] = TimeoutOption):
    _emit(CollectionUtils.reject(CommandCallback(command, timeout).predicate, _stdin()))


@collection_app.command("some")
@exit_codes
def collection_some(command: str, timeout: Optional[float] = TimeoutOption):
    _status(CollectionUtils.some(CommandCallback(command, timeout).predicate, _stdin()))


# ================================================================
# date
# ================================================================
UnitOption = typer.Option(Unit.days, "--unit", "-u", case_sensitive=False)


@date_app.command("now")
@exit_codes
def date_now():
    typer.echo(DateUtils.now())


@date_app.command("epoch")
@exit_codes
def date_epoch(datetime_string: str):
    typer.echo(DateUtils.epoch(datetime_string))


@date_app.command("format")
@exit_codes
def date_format(timestamp: int, fmt: Optional[str] = typer.Argument(None)):
    typer.echo(DateUtils.format(timestamp, fmt))


@date_app.command("add")
@exit_codes
def date_add(timestamp: int, n: int, unit: Unit = UnitOption):
    typer.echo(getattr(DateUtils, f"add_{unit.value}_to")(timestamp, n))


@date_app.command("sub")
@exit_codes
def date_sub(timestamp: int, n: int, unit: Unit = UnitOption):
    typer.echo(getattr(DateUtils, f"sub_{unit.value}_from")(timestamp, n))


@date_app.command("add-now")
@exit_codes
def date_add_now(n: int, unit: Unit = UnitOption):
    typer.echo(getattr(DateUtils, f"add_{unit.value}_to_now")(n))


@date_app.command("sub-now")
@exit_codes
def date_sub_now(n: int, unit: Unit = UnitOption):
    typer.echo(getattr(DateUtils, f"sub_{unit.value}_from_now")(n))


if __name__ == "__main__":
    app()

# python -m shutility.cli date format 1594143480
