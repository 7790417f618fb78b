"""Escaping of values embedded in unit files.

systemd expands ``%`` specifiers in most directives and splits ``Exec*=``
lines on whitespace, honouring double quotes. ``Exec*=`` lines also
substitute ``$VAR`` and ``${VAR}`` from the unit environment, which
``Environment=`` does not. Values taken from the runtime or the user are
escaped so they reach the container unchanged. Specifiers podunit emits on
purpose (``%t``, ``%n``, ``%i``) are wrapped in :class:`Verbatim` and left
alone.
"""

import re
from typing import Iterable


_NEEDS_QUOTING = re.compile(r"[\s\"'\\]")


class Verbatim(str):
    """Text that is already valid unit-file syntax."""
    pass


def escape_percent(text: str) -> str:
    """Double every percent sign."""
    return text.replace("%", "%%")


def escape_dollar(text: str) -> str:
    """Double every dollar sign."""
    return text.replace("$", "$$")


def quote_argument(arg: str) -> str:
    """Escape a single command-line token for an Exec*= or Environment= line."""
    if isinstance(arg, Verbatim):
        return str(arg)
    arg = escape_percent(arg)
    if _NEEDS_QUOTING.search(arg):
        arg = '"' + arg.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return arg


def join_command(tokens: Iterable[str]) -> str:
    """Escape each token and join them into one Exec*= command line."""
    return " ".join(
        quote_argument(token if isinstance(token, Verbatim) else escape_dollar(token))
        for token in tokens
    )
