# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/base_generator.py

"""Unified base for item-generating agents throttled by a proceed handshake."""

from __future__ import annotations

from typing import Generic, Type, TypeVar, cast

import pyuvm

from . import utils_dv
from .base_agent import BaseAgentMixin
from .base_handshake import BaseHandshake
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class RandomizationError(RuntimeError):
    """Stimulus randomization failed; fatal, the run is aborted."""


class BaseGenerator(BaseAgentMixin, pyuvm.uvm_component, Generic[T]):
    """Produce a fixed number of items, one per proceed pulse.

    Execution Flow (main_loop):
        1. body_pre() - Optional pre-generation hook
        2. For each item (seq_len times):
           a. make_item(index) - Create transaction (honors factory overrides)
           b. set_item_inputs(item, index) - Randomize/configure (must implement)
           c. put_port.put(item) - Hand off on the request channel
           d. proceed.take() - Wait for the checker to release the next one
        3. body_post() - Optional post-generation hook
        4. done.pulse() - Exactly once, after the last item was released

    The proceed and done handshakes are owned by the environment and
    assigned in its connect_phase.

    Subclasses must implement:
        set_item_inputs(item, index): Randomize or configure transaction fields

    Configuration (via config_db):
        seq_len (int): Number of items to generate (default: 1)

    Attributes:
        put_port: Blocking put port towards the request channel
        proceed: Handshake pulsed by the checker once per checked item
        done: Handshake pulsed once when generation is complete
        sent_count: Items handed off so far

    Example:
        >>> class MyGenerator(BaseGenerator[MyItem]):
        ...     async def set_item_inputs(self, item, index):
        ...         item.addr = random.randrange(256)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._agent_init()
        self.seq_len: int = 1
        self.put_port: pyuvm.uvm_put_port
        self.proceed: BaseHandshake | None = None
        self.done: BaseHandshake | None = None
        self.sent_count: int = 0
        self._item_class_constructor: Type[T] | None = None

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        self.put_port = pyuvm.uvm_put_port("put_port", self)
        self.logger.debug("build_phase end")

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.seq_len = utils_dv.config_int(self, "seq_len", self.seq_len)
        self.logger.debug("end_of_elaboration_phase end: seq_len=%d", self.seq_len)

    async def main_loop(self) -> None:
        """Generate seq_len items in lockstep with the checker, then signal done."""
        if self.proceed is None or self.done is None:
            raise RuntimeError(
                f"{self.get_full_name()}: proceed/done handshakes not connected"
            )
        self.logger.debug("main_loop begin: length = %d", self.seq_len)
        await self.body_pre()
        # Ask the factory what BaseItem ultimately resolves to (after overrides)
        sample = pyuvm.uvm_factory().create_object_by_type(
            BaseItem, name="item_type_lookup"
        )
        self._item_class_constructor = cast(Type[T], type(sample))
        for i in range(self.seq_len):
            item = self.make_item(i)
            await self.set_item_inputs(item, i)
            self.logger.debug("put %d/%d: %s", i + 1, self.seq_len, item)
            await self.put_port.put(item)
            self.sent_count += 1
            await self.proceed.take()
        await self.body_post()
        self.logger.info("generated %d item(s); signalling done", self.sent_count)
        self.done.pulse()
        self.logger.debug("main_loop end")

    async def body_pre(self) -> None:
        """Hook before the first item."""

    def make_item(self, index: int) -> T:
        """Create one transaction item (honors type overrides)."""
        assert self._item_class_constructor is not None
        return self._item_class_constructor(f"tr{index}")

    async def set_item_inputs(self, item: T, index: int) -> None:
        """Must be implemented in subclasses: randomize/configure the item."""
        raise NotImplementedError

    async def body_post(self) -> None:
        """Hook after the last item was released."""
