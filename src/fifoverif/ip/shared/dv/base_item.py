# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/base_item.py

"""Base transaction item with declared fields and freeze-on-handoff."""

from __future__ import annotations

import json
from typing import Any, Iterable, Self

import pyuvm


class FrozenItemError(AttributeError):
    """Raised when a field of a frozen item is assigned."""


class BaseItem(pyuvm.uvm_sequence_item):
    """Base transaction item with field management and a frozen-snapshot mode.

    Fields are split into *inputs* (what the stimulus asks for) and *outputs*
    (what the DUT did, filled in by whoever observes it). Ownership of an item
    moves across channel hops; the last owner calls freeze() before handing
    it to a consumer that must see a stable snapshot. Assigning a declared
    field on a frozen item raises FrozenItemError.

    Subclasses must implement:
        _in_fields(): Return tuple of input field names
        _out_fields(): Return tuple of output field names

    Example:
        >>> class MyItem(BaseItem):
        ...     def __init__(self, name="my_item"):
        ...         super().__init__(name)
        ...         self.addr = 0
        ...         self.resp = None
        ...
        ...     def _in_fields(self):
        ...         return ("addr",)
        ...
        ...     def _out_fields(self):
        ...         return ("resp",)
        >>> tr = MyItem()
        >>> tr.freeze()
        >>> tr.addr = 1  # raises FrozenItemError
    """

    _frozen: bool = False

    def __setattr__(self, key: str, value: Any) -> None:
        if self._frozen and key in self._all_fields():
            raise FrozenItemError(
                f"{type(self).__name__}.{key} assigned after freeze()"
            )
        super().__setattr__(key, value)

    def _in_fields(self) -> Iterable[str]:
        """Fields considered *inputs* (stimulus)."""
        return ()

    def _out_fields(self) -> Iterable[str]:
        """Fields considered *outputs* (observed from DUT)."""
        return ()

    def _all_fields(self) -> tuple[str, ...]:
        # Declared order, duplicates dropped
        seen: set[str] = set()
        ordered: list[str] = []
        for f in list(self._in_fields()) + list(self._out_fields()):
            if f not in seen:
                seen.add(f)
                ordered.append(f)
        return tuple(ordered)

    def freeze(self) -> Self:
        """Make the declared fields read-only from now on."""
        object.__setattr__(self, "_frozen", True)
        return self

    @property
    def frozen(self) -> bool:
        """True once freeze() has been called."""
        return self._frozen

    def to_dict(self) -> dict[str, object]:
        """Structured view for logging/JSON (in+out)."""
        return {f: _jsonable(getattr(self, f)) for f in self._all_fields()}

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


def _jsonable(v: Any) -> Any:
    # Enums and similar log by name
    name = getattr(v, "name", None)
    if isinstance(name, str) and not isinstance(v, (int, str)):
        return name
    return v
