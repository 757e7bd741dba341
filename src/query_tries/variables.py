"""Curator variable store: named substitution values scoped to one try."""

from __future__ import annotations

import re
from typing import Callable, Iterable, Mapping

from query_tries.exceptions import InvalidCuratorVariableError
from query_tries.models import CuratorVariable

VARIABLE_NAME_RE = re.compile(r"^\w+$")


class CuratorVariableStore:
    """Mutable name -> value mapping for a single try.

    Every mutation calls ``on_change`` so the owner can recompile the
    try's cached args.
    """

    def __init__(
        self,
        variables: Mapping[str, str] | Iterable[CuratorVariable] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._values: dict[str, str] = {}
        self._on_change = on_change
        if isinstance(variables, Mapping):
            items = list(variables.items())
        else:
            items = [(v.name, v.value) for v in variables or []]
        for name, value in items:
            self._values[_check_name(name)] = str(value)

    def set(self, name: str, value: str) -> None:
        self._values[_check_name(name)] = str(value)
        self._changed()

    def remove(self, name: str) -> bool:
        if name not in self._values:
            return False
        del self._values[name]
        self._changed()
        return True

    def as_map(self) -> dict[str, str]:
        return {name: self._values[name] for name in sorted(self._values)}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()


def _check_name(name: str) -> str:
    if not isinstance(name, str) or not VARIABLE_NAME_RE.match(name):
        raise InvalidCuratorVariableError(
            f"Curator variable names may only contain letters, digits and '_': {name!r}"
        )
    return name
