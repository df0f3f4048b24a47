# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from builder import from_json_file, standard_enigma
from chain import Chain
from components import ConfigurationError
from debug import TOPICS, Debug
from utilities import base_reflectors, base_rotors, preprocess_message

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()
debug.toggle_global(False)


@dataclass(slots=True)
class Config:
    """Runtime switches for the command line front end."""

    block: int = 5                  # display block size
    verify: bool = True             # decipher with a fresh copy after encrypting
    debug_topics: List[str] = field(default_factory=list)


# ────────────────────────────────────────────────────────────────────────
#  1. MachineContext – keeps the keyed chain & reset logic
# ────────────────────────────────────────────────────────────────────────


class MachineContext:
    """Holds the machine as configured; every message starts from there."""

    def __init__(self, chain: Chain, source: str) -> None:
        self.template = chain
        self.source = source

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "MachineContext":
        if args.config:
            return cls(from_json_file(args.config), str(args.config))

        fast, middle, slow = args.rotors
        chain = standard_enigma(
            fast, middle, slow,
            reflector=args.reflector,
            offsets=args.offsets,
            plugs=args.plugs,
        )
        label = f"rotors {fast}-{middle}-{slow}, reflector {args.reflector}"
        return cls(chain, label)

    def rewind(self) -> Chain:
        """Fresh machine in the configured start position."""
        return self.template.copy()

    def encipher_block(self, text: str) -> str:
        """Encipher *text* once, assuming it is already sanitised."""
        return self.rewind().encrypt(text)


def format_blocks(text: str, block: int) -> str:
    if block <= 0:
        return text
    return "  ".join(text[i : i + block] for i in range(0, len(text), block))


def run_once(ctx: MachineContext, cfg: Config, message: str) -> str:
    clean = preprocess_message(message)
    cipher = ctx.encipher_block(clean)
    print("Encrypted:", format_blocks(cipher, cfg.block))
    if cfg.verify:
        print("Decrypted:", format_blocks(ctx.encipher_block(cipher), cfg.block))
    return cipher


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor chain")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to encrypt (or decrypt). If omitted, an interactive REPL starts.")
    p.add_argument("--config", metavar="FILE", type=Path, help="Load the component list from JSON instead of the standard preset.")
    p.add_argument("--rotors", nargs=3, metavar=("FAST", "MIDDLE", "SLOW"), default=["III", "II", "I"], help=f"Catalogued rotors, fast one first. Choices: {', '.join(base_rotors)}. Default: III II I")
    p.add_argument("--reflector", default="B", help=f"Catalogued reflector ({', '.join(base_reflectors)}). Default: B")
    p.add_argument("--offsets", nargs=3, type=int, metavar="N", default=[0, 0, 0], help="Start offsets of the three rotors. Default: 0 0 0")
    p.add_argument("--plugs", nargs="*", metavar="PAIR", default=[], help="Plugboard swap pairs, e.g. AB CD EF")
    p.add_argument("--block", type=int, default=5, help="Output block size, 0 for none. Default: 5")
    p.add_argument("--no-verify", dest="verify", action="store_false", help="Do not decipher the result again with a fresh machine.")
    p.add_argument("--debug", nargs="+", metavar="TOPIC", choices=TOPICS, default=[], help=f"Enable debug logging for: {', '.join(TOPICS)}")
    return p.parse_args(argv)


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = Config(block=args.block, verify=args.verify, debug_topics=args.debug)

    if cfg.debug_topics:
        debug.toggle_global(True)
        debug.enable(*cfg.debug_topics)

    try:
        ctx = MachineContext.from_args(args)
    except ConfigurationError as e:
        sys.exit(f"Failed to build machine: {e}")

    # one‑shot mode ------------------------------------------------------
    if args.message is not None:
        run_once(ctx, cfg, args.message)
        return

    # interactive REPL ---------------------------------------------------
    print(f"\nLoaded {ctx.source}.")
    print("Type blank line to quit.\n")
    while True:
        try:
            txt = input("\nMessage: ")
        except EOFError:
            break
        if not txt.strip():
            break
        run_once(ctx, cfg, txt)


if __name__ == "__main__":
    main()
