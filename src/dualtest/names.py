"""Display names for test callables."""

from __future__ import annotations

from typing import Any, Sequence

from dualtest.assertions.base import verify


def split_names(text: str) -> list[str]:
    """Split comma-joined source text into display names.

    Each entry is trimmed and loses a single leading ``&`` (the marker used
    when a fixture method reference is written as ``&Fixture.add``).
    """
    if not text.strip():
        return []
    names: list[str] = []
    for raw in text.split(","):
        name = raw.strip()
        if name.startswith("&"):
            name = name[1:].lstrip()
        names.append(name)
    return names


def display_name(fn: Any) -> str:
    """Name a callable the way it would be written at the call site."""
    for attr in ("__qualname__", "__name__"):
        name = getattr(fn, attr, None)
        if isinstance(name, str) and name:
            return name.rpartition("<locals>.")[2]
    return repr(fn)


def resolve_names(
    names: str | Sequence[str] | None, callables: Sequence[Any]
) -> list[str]:
    """Pair every callable with a display name.

    ``names`` may be the comma-joined source text of the call, an explicit
    sequence, or None to derive names from the callables themselves. A count
    mismatch is a caller error.
    """
    if names is None:
        return [display_name(fn) for fn in callables]
    resolved = split_names(names) if isinstance(names, str) else list(names)
    verify(
        len(resolved) == len(callables),
        f"got {len(resolved)} test names for {len(callables)} tests",
    )
    return resolved
