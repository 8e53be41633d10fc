"""
Shared helpers for genlayer-cli commands.
"""

import json
from typing import Any, Optional

import click
from rich.console import Console

from genlayer_cli.commands.errors import ValidationError

console = Console()


class VariadicOption(click.Option):
    """Option taking every following value up to the next known option.

    ``--args 1 2 3`` collects ``("1", "2", "3")``. Repeating the flag
    (``--args 1 --args 2``) still works and the groups are concatenated.
    Values that merely look like options (``-5``) are kept, only names the
    command actually defines end the list.
    """

    def __init__(self, *args, **kwargs):
        kwargs["multiple"] = True
        kwargs.setdefault("default", ())
        kwargs.setdefault("metavar", "VALUE...")
        super().__init__(*args, **kwargs)

    def add_to_parser(self, parser, ctx):
        retval = super().add_to_parser(parser, ctx)

        def is_option(token: str) -> bool:
            name = token.split("=", 1)[0]
            return token == "--" or name in parser._long_opt or name in parser._short_opt

        for name in self.opts:
            parser_option = parser._long_opt.get(name) or parser._short_opt.get(name)
            if parser_option is None:
                continue
            store = parser_option.process

            def process(value, state, store=store):
                values = [value]
                while state.rargs and not is_option(state.rargs[0]):
                    values.append(state.rargs.pop(0))
                store(tuple(values), state)

            parser_option.process = process
        return retval

    def type_cast_value(self, ctx, value):
        if not isinstance(value, (list, tuple)):
            return ()
        flattened = []
        for group in value:
            flattened.extend(group if isinstance(group, (list, tuple)) else (group,))
        return tuple(self.type(item, param=self, ctx=ctx) for item in flattened)


def parse_arg_value(raw: str) -> Any:
    """Decode a single positional contract argument.

    JSON literals (numbers, booleans, null, arrays, objects) are decoded,
    anything else is passed through as a plain string.
    """
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return raw


def parse_args(values: Optional[tuple]) -> list:
    """Decode the values collected by a variadic ``--args`` option."""
    return [parse_arg_value(value) for value in values or ()]


def _coerce_number(value: str) -> Any:
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def parse_kwargs(raw: Optional[str]) -> dict[str, Any]:
    """Parse ``KEY=VALUE,KEY2=VALUE2`` into a dict.

    Numeric values become numbers, the rest stay strings.

    Raises:
        ValidationError: If a pair is not of the form KEY=VALUE.
    """
    if not raw:
        return {}

    result: dict[str, Any] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValidationError(
                f"Invalid kwarg '{pair}'. Use KEY=VALUE.", field="kwargs", value=pair
            )
        result[key.strip()] = _coerce_number(value.strip())
    return result


def to_json(data: Any) -> str:
    """Pretty JSON for console output, tolerant of non-serializable values."""
    return json.dumps(data, indent=2, default=str)
