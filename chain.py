# chain.py  ────────────────────────────────────────────────────────
from __future__ import annotations

from copy import deepcopy
from itertools import pairwise
from typing import Iterator, List

from components import (
    ALPHABET,
    Component,
    ComponentKind,
    ConfigurationError,
    Keyboard,
)
from debug import Debug

debug = Debug()
debug.disable("encipher")


class Chain:
    """Components in signal order, linked by index. Index 0 is the head:
    stepping and enciphering always start there."""

    def __init__(self, components: List[Component]) -> None:
        self.components = components
        self.kb = Keyboard(ALPHABET)

    # ── container helpers ───────────────────────────────────────

    @property
    def head(self) -> Component:
        return self.components[0]

    def __len__(self) -> int:
        return len(self.components)

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components)

    def __getitem__(self, index: int) -> Component:
        return self.components[index]

    @property
    def offsets(self) -> list[int]:
        """Current offset of every rotor, head to tail."""
        return [c.offset for c in self.components if c.is_rotor]

    def copy(self) -> "Chain":
        """Independent machine with identical wiring and state."""
        return deepcopy(self)

    # ── stepping logic  ─────────────────────────────────────────

    def step(self, steps: int = 1, start: int = 0) -> None:
        """Advance the chain by *steps* from component *start* onwards.

        A rotor hands on only the number of times it left its notch;
        plugboards and reflectors hand on the full count unchanged.
        """
        index: int | None = start
        carry = steps
        while index is not None and carry > 0:
            comp = self.components[index]
            revolutions = comp.count_notch_crossings(carry)
            comp.rotate(carry)
            debug.log(
                "stepping",
                f"#{index} {comp.kind.value} +{carry} -> {comp.offset}, carry {revolutions}",
            )
            if comp.is_rotor and revolutions == 0:
                break
            carry = revolutions
            index = comp.next

    # ── encipher one symbol  ────────────────────────────────────

    def encrypt_char(self, letter: str) -> str:
        self.step(1)
        signal = self.kb.forward(letter)

        # out to the reflector (or the tail if there is none)
        index = 0
        while True:
            comp = self.components[index]
            before, signal = signal, comp.forward[signal]
            debug.log(comp.kind.value, f"#{index} {before}->{signal}")
            if comp.kind is ComponentKind.REFLECTOR or comp.next is None:
                break
            index = comp.next

        # and back to the head
        back = self.components[index].prev
        while back is not None:
            comp = self.components[back]
            signal = comp.backward[signal]
            back = comp.prev

        out_ch = self.kb.backward(signal)
        debug.log("encipher", f"{letter} -> {out_ch} at {self.offsets}")
        return out_ch

    def encrypt(self, message: str) -> str:
        """Encipher an already sanitised A–Z message; state carries over
        from one letter to the next."""
        return "".join(self.encrypt_char(ch) for ch in message)

    decrypt = encrypt     # reciprocal: same path, same stepping

    # nicety for debugging
    def __repr__(self) -> str:
        return f"<Chain {' -> '.join(repr(c) for c in self.components)}>"


def connect(*components: Component) -> Chain:
    """Link *components* in signal order and return the chain."""
    if not components:
        raise ConfigurationError("connect: no components given")

    parts = list(components)
    parts[0].prev = None
    parts[-1].next = None
    for i, (left, right) in enumerate(pairwise(parts)):
        left.next = i + 1
        right.prev = i
    return Chain(parts)
