# components.py
from __future__ import annotations

import string
from collections.abc import Sequence
from enum import Enum

from debug import Debug

debug = Debug()
debug.disable("rotor")

ALPHABET = string.ascii_uppercase
NUM_LETTERS = len(ALPHABET)


class ConfigurationError(ValueError):
    """A component list or wiring that cannot form a valid chain."""


class ComponentKind(Enum):
    PLUGBOARD = "plugboard"
    ROTOR = "rotor"
    REFLECTOR = "reflector"

    @classmethod
    def parse(cls, name: str) -> "ComponentKind":
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            known = ", ".join(k.value for k in cls)
            raise ConfigurationError(
                f"Unknown component type {name!r} (expected one of: {known})"
            ) from None


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    def __init__(self, alphabet: str = ALPHABET) -> None:
        self.alphabet: str = alphabet
        self.alpha_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(alphabet)
        }

    # letter → integer signal
    def forward(self, letter: str) -> int:
        try:
            return self.alpha_to_index[letter]
        except KeyError:
            raise ValueError(
                f"Invalid character {letter!r} for current alphabet."
            ) from None

    # integer signal → letter
    def backward(self, signal: int) -> str:
        if not (0 <= signal < len(self.alphabet)):
            hi = len(self.alphabet) - 1
            raise ValueError(f"Signal {signal} out of range 0–{hi}")
        return self.alphabet[signal]


# ── wiring checks ─────────────────────────────────────────────────
def parse_permutation(spec: str, label: str = "wiring") -> list[int]:
    """Turn a 26-letter permutation string into a list of indices."""
    if not isinstance(spec, str):
        raise ConfigurationError(f"{label} must be a string, got {type(spec).__name__}")
    spec = spec.upper()
    if len(spec) != NUM_LETTERS or sorted(spec) != list(ALPHABET):
        raise ConfigurationError(
            f"{label} {spec!r} must be a permutation of {ALPHABET}"
        )
    return [ALPHABET.index(c) for c in spec]


def check_reflector(wiring: Sequence[int]) -> None:
    # involution (w[w[i]] == i) with no self-maps
    for i, j in enumerate(wiring):
        if wiring[j] != i or i == j:
            raise ConfigurationError(
                "Reflector wiring must be an involution with no fixed points "
                f"({ALPHABET[i]}->{ALPHABET[j]} breaks it)"
            )


def letter_index(letter: str, label: str = "letter") -> int:
    if not isinstance(letter, str) or len(letter) != 1 or letter.upper() not in ALPHABET:
        raise ConfigurationError(f"{label} must be a single letter A-Z, got {letter!r}")
    return ALPHABET.index(letter.upper())


# ── Component ─────────────────────────────────────────────────────
class Component:
    """One scrambling unit of the chain: plugboard, rotor or reflector.

    ``forward`` and ``backward`` are the *effective* lookup tables at the
    current offset; they are rebuilt from the immutable base wiring every
    time a rotor turns, so ``backward[forward[i]] == i`` always holds.
    ``next``/``prev`` are indices into the owning ``Chain``.
    """

    def __init__(self, kind: ComponentKind, notch: int = 0) -> None:
        self.kind = kind
        self.offset = 0
        self.notch = notch % NUM_LETTERS if kind is ComponentKind.ROTOR else 0
        self.next: int | None = None
        self.prev: int | None = None

        if kind is ComponentKind.REFLECTOR:
            self._base = [NUM_LETTERS - 1 - i for i in range(NUM_LETTERS)]
        else:
            self._base = list(range(NUM_LETTERS))
        self.forward: list[int] = []
        self.backward: list[int] = []
        self._rederive()

    @property
    def is_rotor(self) -> bool:
        return self.kind is ComponentKind.ROTOR

    @property
    def wiring(self) -> str:
        """Base wiring as letters, i.e. the ``out`` string for ``in`` = A..Z."""
        return "".join(ALPHABET[j] for j in self._base)

    # ── wiring ----------------------------------------------------
    def set_character_map(self, in_spec: str, out_spec: str) -> "Component":
        src = parse_permutation(in_spec, "in")
        dst = parse_permutation(out_spec, "out")

        wiring = [0] * NUM_LETTERS
        for inc, outc in zip(src, dst):
            wiring[inc] = outc
        if self.kind is ComponentKind.REFLECTOR:
            check_reflector(wiring)

        self._base = wiring
        self._rederive()
        return self

    # ── stepping --------------------------------------------------
    def count_notch_crossings(self, steps: int) -> int:
        """How many times advancing *steps* positions carries into the next
        component. Non-rotors pass the full count through."""
        if not self.is_rotor:
            return steps
        if steps <= 0:
            return 0
        # zero-point just past the notch: every wrap of it is one carry
        adjusted = (self.offset - self.notch - 1) % NUM_LETTERS
        return (adjusted + steps) // NUM_LETTERS

    def rotate(self, steps: int) -> None:
        """Turn this rotor alone by *steps*; no carry, no-op for other kinds."""
        if steps <= 0 or not self.is_rotor:
            return
        self.offset = (self.offset + steps) % NUM_LETTERS
        self._rederive()
        debug.log("rotor", f"offset {self.offset} ({ALPHABET[self.offset]})")

    def _rederive(self) -> None:
        o = self.offset
        base = self._base
        self.forward = [(base[(i + o) % NUM_LETTERS] - o) % NUM_LETTERS
                        for i in range(NUM_LETTERS)]
        self.backward = [0] * NUM_LETTERS
        for i, j in enumerate(self.forward):
            self.backward[j] = i

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        if self.is_rotor:
            return (f"<Rotor pos={ALPHABET[self.offset]} "
                    f"notch={ALPHABET[self.notch]}>")
        return f"<{self.kind.name.title()} {self.wiring}>"


# ── factories ─────────────────────────────────────────────────────
def new_plugboard(pairs: Sequence[str | tuple[str, str]] = ()) -> Component:
    """Plugboard built from swap pairs such as ``["AB", "CD"]``."""
    mapping: dict[str, str] = {ch: ch for ch in ALPHABET}
    used: set[str] = set()

    for raw in pairs:
        # normalise to (a, b)
        if isinstance(raw, str):
            if len(raw) != 2:
                raise ConfigurationError(f"Pair {raw!r} must be exactly 2 symbols")
            a, b = raw.upper()
        else:
            a, b = (s.upper() for s in raw)

        if a == b:
            raise ConfigurationError(f"Plugboard cannot map a symbol to itself: {a}")
        if a not in ALPHABET or b not in ALPHABET:
            bad = a if a not in ALPHABET else b
            raise ConfigurationError(f"Symbol {bad!r} not in alphabet")
        if a in used or b in used:
            dup = a if a in used else b
            raise ConfigurationError(f"Character {dup!r} already used in plugboard")

        mapping[a], mapping[b] = b, a
        used.update((a, b))

    pb = Component(ComponentKind.PLUGBOARD)
    pb.set_character_map(ALPHABET, "".join(mapping[ch] for ch in ALPHABET))
    debug.log("plugboard", f"pairs {sorted(used)}")
    return pb
