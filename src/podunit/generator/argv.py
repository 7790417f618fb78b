"""Token-level editing of recorded create command lines.

A recorded command looks like::

    podman [global flags] [container|pod] create|run [flags] [image [command...]]

Everything here works on lists of tokens so the relative order of the
original arguments is never disturbed.
"""

from dataclasses import dataclass, field
from typing import Callable, Collection, List, Optional, Sequence


# Global runtime flags that take their value as the next token
GLOBAL_VALUE_FLAGS = frozenset({
    "--cgroup-manager",
    "--cni-config-dir",
    "--conmon",
    "--connection",
    "-c",
    "--events-backend",
    "--hooks-dir",
    "--identity",
    "--imagestore",
    "--log-level",
    "--module",
    "--network-cmd-path",
    "--network-config-dir",
    "--root",
    "--runroot",
    "--runtime",
    "--runtime-flag",
    "--ssh",
    "--storage-driver",
    "--storage-opt",
    "--tmpdir",
    "--url",
    "--volumepath",
})

# create/run and pod create flags that never take a separate value
BOOLEAN_FLAGS = frozenset({
    "--detach",
    "--disable-content-trust",
    "--env-host",
    "--help",
    "--http-proxy",
    "--infra",
    "--init",
    "--interactive",
    "--no-healthcheck",
    "--no-hostname",
    "--no-hosts",
    "--oom-kill-disable",
    "--passwd",
    "--privileged",
    "--publish-all",
    "--quiet",
    "--read-only",
    "--read-only-tmpfs",
    "--replace",
    "--rm",
    "--rmi",
    "--rootfs",
    "--share-parent",
    "--sig-proxy",
    "--tls-verify",
    "--tty",
})

BOOLEAN_SHORT_FLAGS = frozenset("dtiPq")


@dataclass(frozen=True)
class CreateCommand:
    """A recorded create command split into its parts."""
    executable: str
    global_flags: List[str] = field(default_factory=list)
    verb: List[str] = field(default_factory=list)
    arguments: List[str] = field(default_factory=list)


def split_create_command(argv: Sequence[str]) -> CreateCommand:
    """Split a recorded argv into executable, global flags, verb and arguments."""
    if not argv:
        raise ValueError("empty create command")

    i = 1
    global_flags = []
    while i < len(argv) and argv[i].startswith("-"):
        token = argv[i]
        global_flags.append(token)
        if "=" not in token and token in GLOBAL_VALUE_FLAGS and i + 1 < len(argv):
            global_flags.append(argv[i + 1])
            i += 2
        else:
            i += 1

    verb = []
    if i < len(argv) and argv[i] in ("container", "pod"):
        verb.append(argv[i])
        i += 1
    if i >= len(argv) or argv[i] not in ("create", "run"):
        raise ValueError(f"no create or run subcommand in {' '.join(argv)!r}")
    verb.append(argv[i])

    return CreateCommand(
        executable=argv[0],
        global_flags=global_flags,
        verb=verb,
        arguments=list(argv[i + 1:]),
    )


def _short_letters(token: str) -> str:
    """Letters of a short option cluster, up to the first one taking a value."""
    letters = token.split("=", 1)[0][1:]
    for pos, letter in enumerate(letters):
        if letter not in BOOLEAN_SHORT_FLAGS:
            return letters[:pos + 1]
    return letters


def takes_value(token: str) -> bool:
    """Whether an option token consumes the following token as its value."""
    if "=" in token:
        return False
    if token.startswith("--"):
        return token not in BOOLEAN_FLAGS
    letters = token[1:]
    for pos, letter in enumerate(letters):
        if letter not in BOOLEAN_SHORT_FLAGS:
            # -p 80:80 takes the next token, -p80:80 carries its value
            return pos == len(letters) - 1
    return False


def first_positional(tokens: Sequence[str]) -> int:
    """Index of the first positional token (the image for containers)."""
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == "--" or token == "-" or not token.startswith("-"):
            return i
        i += 2 if takes_value(token) else 1
    return len(tokens)


def insert_tokens(tokens: Sequence[str], index: int, new: Sequence[str]) -> List[str]:
    """Return a copy of tokens with new inserted at index."""
    if index < 0 or index > len(tokens):
        raise IndexError(f"insert position {index} out of range for {len(tokens)} tokens")
    return list(tokens[:index]) + list(new) + list(tokens[index:])


def has_flag(tokens: Sequence[str], names: Collection[str], short: Optional[str] = None) -> bool:
    """Whether any of the long flags (or the short letter) is set before the image."""
    end = first_positional(tokens)
    i = 0
    while i < end:
        token = tokens[i]
        if token.split("=", 1)[0] in names:
            return True
        if short and not token.startswith("--") and short in _short_letters(token):
            return True
        i += 2 if takes_value(token) else 1
    return False


def remove_flags(tokens: Sequence[str], names: Collection[str]) -> List[str]:
    """Drop the given long flags, with their values, from the option part."""
    end = first_positional(tokens)
    result = []
    i = 0
    while i < end:
        width = 2 if takes_value(tokens[i]) else 1
        if tokens[i].split("=", 1)[0] not in names:
            result.extend(tokens[i:i + width])
        i += width
    result.extend(tokens[end:])
    return result


def map_flag_value(tokens: Sequence[str], name: str, func: Callable[[str], str]) -> List[str]:
    """Replace the value of a long flag in the option part with func(value).

    Works for both ``--name foo`` and ``--name=foo``. In the second form
    func receives the whole ``--name=foo`` token and must keep the prefix.
    """
    end = first_positional(tokens)
    result = list(tokens)
    i = 0
    while i < end:
        token = tokens[i]
        if token == name and i + 1 < len(tokens):
            result[i + 1] = func(tokens[i + 1])
        elif token.startswith(f"{name}="):
            result[i] = func(token)
        i += 2 if takes_value(token) else 1
    return result
