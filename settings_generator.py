# settings_generator.py
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from random import Random, SystemRandom
from typing import Dict, List, Sequence

from builder import from_json
from components import ALPHABET, NUM_LETTERS, ConfigurationError
from utilities import base_reflectors, base_rotors

MAX_PAIRS = NUM_LETTERS // 2

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(alpha: str, k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    k = min(k, len(alpha) // 2)
    pool = list(alpha)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def pairs_to_wiring(pairs: Sequence[str], alpha: str = ALPHABET) -> str:
    mapping = {ch: ch for ch in alpha}
    for a, b in pairs:
        mapping[a], mapping[b] = b, a
    return "".join(mapping[ch] for ch in alpha)


def generate_specs(rng: Random | SystemRandom, pairs: int = 10) -> List[Dict]:
    """Random component list: plugboard, three distinct rotors, reflector."""
    rotor_names = rng.sample(list(base_rotors), 3)
    reflector = rng.choice(list(base_reflectors))
    plugs = choose_pairs(ALPHABET, pairs, rng)

    specs: List[Dict] = [
        {"type": "plugboard", "in": ALPHABET, "out": pairs_to_wiring(plugs)},
    ]
    for name in rotor_names:
        wiring, notch = base_rotors[name]
        specs.append({
            "type": "rotor",
            "in": ALPHABET,
            "out": wiring,
            "offset": rng.randrange(NUM_LETTERS),
            "notch": notch,
        })
    specs.append({"type": "reflector", "in": ALPHABET, "out": base_reflectors[reflector]})
    return specs


def parse_cli(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a random rotor chain config")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument(
        "--outfile",
        type=Path,
        default=Path("enigma.json"),
        help="Destination JSON file (default: enigma.json)",
    )
    p.add_argument(
        "--pairs",
        type=int,
        default=10,
        help=f"Plugboard pairs, 0-{MAX_PAIRS} (default: 10)",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_cli(argv)
    if not 0 <= args.pairs <= MAX_PAIRS:
        sys.exit(f"--pairs must be between 0 and {MAX_PAIRS}")

    rng = build_rng(args.seed)
    specs = generate_specs(rng, args.pairs)
    text = json.dumps(specs, indent=2)

    # refuse to write something the builder would reject
    try:
        from_json(text)
    except ConfigurationError as e:
        sys.exit(f"Generated config is invalid: {e}")

    args.outfile.write_text(text, encoding="utf-8")
    names = {wiring: name for name, (wiring, _) in base_rotors.items()}
    rotors = [s for s in specs if s["type"] == "rotor"]
    print(f"✅  Wrote {args.outfile}\n"
        f"   rotors      : {[names[r['out']] for r in rotors]}\n"
        f"   offsets     : {[r['offset'] for r in rotors]}\n"
        f"   plug pairs  : {min(args.pairs, MAX_PAIRS)}")


if __name__ == "__main__":
    main()
