# builder.py
"""Turn a declarative component list into a live ``Chain``.

A component list is what ``enigma.json`` holds::

    [
      {"type": "plugboard", "in": "ABCD...", "out": "BADC..."},
      {"type": "rotor", "in": "ABC...", "out": "EKMF...", "offset": 3, "notch": "Q"},
      {"type": "reflector", "in": "ABC...", "out": "YRUH..."}
    ]

``in``/``out`` are optional (identity, or ``Z..A`` for a reflector);
``offset`` and ``notch`` only mean something for rotors.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Sequence

from chain import Chain, connect
from components import (
    ALPHABET,
    Component,
    ComponentKind,
    ConfigurationError,
    letter_index,
    new_plugboard,
)
from debug import Debug
from utilities import new_reflector, new_rotor

debug = Debug()
debug.disable("builder")


@dataclass(slots=True)
class ComponentSpec:
    """One entry of a component list."""

    type: str
    in_: str | None = None
    out: str | None = None
    offset: int = 0
    notch: str = "A"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComponentSpec":
        if not isinstance(data, dict):
            raise ConfigurationError(f"Component entry must be an object, got {data!r}")
        if "type" not in data:
            raise ConfigurationError(f"Component entry without 'type': {data!r}")

        offset = data.get("offset", 0)
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise ConfigurationError(f"'offset' must be an integer, got {offset!r}")

        return cls(
            type=data["type"],
            in_=data.get("in"),
            out=data.get("out"),
            offset=offset,
            notch=data.get("notch", "A"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        if self.in_ is not None:
            out["in"] = self.in_
            out["out"] = self.out
        if self.type == ComponentKind.ROTOR.value:
            out["offset"] = self.offset
            out["notch"] = self.notch
        return out


def _make_component(spec: ComponentSpec, position: int) -> Component:
    try:
        kind = ComponentKind.parse(spec.type)
        if (spec.in_ is None) != (spec.out is None):
            raise ConfigurationError("'in' and 'out' must be given together")
        if kind is ComponentKind.ROTOR and spec.offset < 0:
            raise ConfigurationError(f"'offset' must not be negative, got {spec.offset}")

        notch = letter_index(spec.notch, "'notch'") if kind is ComponentKind.ROTOR else 0
        comp = Component(kind, notch=notch)
        if spec.in_ is not None:
            comp.set_character_map(spec.in_, spec.out)
        # static pre-rotation, applied before linking so nothing carries
        comp.rotate(spec.offset)
    except ConfigurationError as exc:
        raise ConfigurationError(f"component #{position}: {exc}") from None

    debug.log("builder", f"#{position} {comp!r}")
    return comp


def build(specs: Sequence[ComponentSpec | Dict[str, Any]]) -> Chain:
    """Build a chain from a component list; fails as a whole on any error."""
    if not specs:
        raise ConfigurationError("build: empty component list")

    parts: List[Component] = []
    for position, raw in enumerate(specs):
        spec = raw if isinstance(raw, ComponentSpec) else ComponentSpec.from_dict(raw)
        parts.append(_make_component(spec, position))
    return connect(*parts)


def from_json(text: str) -> Chain:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"from_json: {exc}") from exc
    if not isinstance(data, list):
        raise ConfigurationError("from_json: expected a list of components")
    return build(data)


def from_json_file(path: str | Path) -> Chain:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"from_json_file: cannot read {path}: {exc}") from exc
    try:
        return from_json(text)
    except ConfigurationError as exc:
        raise ConfigurationError(f"{path}: {exc}") from exc


def dump_specs(chain: Chain) -> List[Dict[str, Any]]:
    """Component list that rebuilds *chain* in its current state."""
    return [
        ComponentSpec(
            type=comp.kind.value,
            in_=ALPHABET,
            out=comp.wiring,
            offset=comp.offset,
            notch=ALPHABET[comp.notch],
        ).to_dict()
        for comp in chain
    ]


def standard_enigma(
    fast: str,
    middle: str,
    slow: str,
    reflector: str = "B",
    offsets: Sequence[int] = (0, 0, 0),
    plugs: Sequence[str] = (),
) -> Chain:
    """Plugboard, three catalogued rotors (fast one first) and a reflector."""
    if len(offsets) != 3:
        raise ConfigurationError("standard_enigma: need exactly 3 offsets")
    rotors = [new_rotor(name, off) for name, off in zip((fast, middle, slow), offsets)]
    return connect(new_plugboard(plugs), *rotors, new_reflector(reflector))
