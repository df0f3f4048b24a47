# utilities.py
from __future__ import annotations

from typing import Dict, Tuple

from components import (
    ALPHABET,
    Component,
    ComponentKind,
    ConfigurationError,
)

# ──────────────────────────────────────────────────────────────────
#  1. Text preprocessing
# ──────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alpha: str = ALPHABET) -> str:
    """Upper‑case and drop every symbol that is not in *alpha*
    (spaces, digits, punctuation), keeping the order of the rest."""
    return "".join(ch for ch in msg.upper() if ch in alpha)


# ──────────────────────────────────────────────────────────────────
#  2. Wheel database
# ──────────────────────────────────────────────────────────────────

# name -> (wiring, notch letter)
base_rotors: Dict[str, Tuple[str, str]] = {
    "I":   ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II":  ("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III": ("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV":  ("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V":   ("VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
}

base_reflectors: Dict[str, str] = {
    "A": "EJMZALYXVBWFCRQUONTSPIKHGD",
    "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
}

rotor_dict: Dict[str, Tuple[str, str]] = {}
for name, entry in base_rotors.items():
    rotor_dict[name] = rotor_dict[name.lower()] = entry  # uppercase + alias

reflector_dict: Dict[str, str] = {}
for name, wiring in base_reflectors.items():
    reflector_dict[name] = reflector_dict[name.lower()] = wiring


def new_rotor(name: str, offset: int = 0) -> Component:
    """Fresh catalogued rotor, pre-rotated by *offset* positions."""
    try:
        wiring, notch = rotor_dict[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown rotor {name!r}. Expected one of {list(base_rotors)}"
        ) from None
    if offset < 0:
        raise ConfigurationError(f"Rotor offset must not be negative, got {offset}")
    rotor = Component(ComponentKind.ROTOR, notch=ALPHABET.index(notch))
    rotor.set_character_map(ALPHABET, wiring)
    rotor.rotate(offset)
    return rotor


def new_reflector(name: str) -> Component:
    try:
        wiring = reflector_dict[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown reflector {name!r}. Expected one of {list(base_reflectors)}"
        ) from None
    return Component(ComponentKind.REFLECTOR).set_character_map(ALPHABET, wiring)


__all__ = [
    "base_rotors",
    "base_reflectors",
    "rotor_dict",
    "reflector_dict",
    "new_rotor",
    "new_reflector",
    "preprocess_message",
]
