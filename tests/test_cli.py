from __future__ import annotations

import json
from pathlib import Path
from random import Random

import pytest

import main
import settings_generator
from builder import from_json, from_json_file
from components import ALPHABET, ComponentKind


def test_main_one_shot(capsys):
    main.main(["-m", "aaaa a", "--block", "0"])
    out = capsys.readouterr().out
    assert "Encrypted: BDZGO" in out
    assert "Decrypted: AAAAA" in out


def test_main_blocks_and_no_verify(capsys):
    main.main(["-m", "A" * 12, "--no-verify"])
    out = capsys.readouterr().out
    assert "Encrypted: BDZGO  WCXLT  KS" in out
    assert "Decrypted" not in out


def test_main_each_message_starts_from_key():
    args = main.parse_args(["--rotors", "I", "II", "III", "--offsets", "1", "2", "3"])
    ctx = main.MachineContext.from_args(args)
    first = ctx.encipher_block("HELLO")
    assert ctx.encipher_block("HELLO") == first
    assert ctx.template.offsets == [1, 2, 3]


def test_main_bad_rotor_exits():
    with pytest.raises(SystemExit, match="Failed to build machine"):
        main.main(["-m", "hi", "--rotors", "I", "II", "XI"])


def test_main_missing_config_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Failed to build machine"):
        main.main(["-m", "hi", "--config", str(tmp_path / "absent.json")])


def test_main_repl(monkeypatch, capsys):
    answers = iter(["Hello World.", ""])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))
    main.main(["--rotors", "III", "II", "I", "--block", "0"])
    out = capsys.readouterr().out
    assert "Loaded rotors III-II-I, reflector B." in out
    assert "Decrypted: HELLOWORLD" in out


def test_format_blocks():
    assert main.format_blocks("ABCDEFG", 3) == "ABC  DEF  G"
    assert main.format_blocks("ABC", 0) == "ABC"


# ── settings generator ─────────────────────────────────────────────


def test_generate_specs_is_deterministic_per_seed():
    assert settings_generator.generate_specs(Random(7)) == settings_generator.generate_specs(Random(7))


def test_generate_specs_shape():
    specs = settings_generator.generate_specs(Random(11), pairs=6)
    kinds = [s["type"] for s in specs]
    assert kinds == ["plugboard", "rotor", "rotor", "rotor", "reflector"]
    assert len({s["out"] for s in specs if s["type"] == "rotor"}) == 3

    chain = from_json(json.dumps(specs))
    pb = chain[0]
    assert pb.kind is ComponentKind.PLUGBOARD
    swapped = [i for i in range(26) if pb.forward[i] != i]
    assert len(swapped) == 12
    assert all(pb.forward[pb.forward[i]] == i for i in range(26))


def test_choose_pairs_caps_at_half_alphabet():
    pairs = settings_generator.choose_pairs(ALPHABET, 40, Random(0))
    assert len(pairs) == 13
    assert sorted("".join(pairs)) == list(ALPHABET)


def test_generator_writes_loadable_config(tmp_path: Path, capsys) -> None:
    path = tmp_path / "enigma.json"
    settings_generator.main(["--seed", "3", "--outfile", str(path), "--pairs", "4"])
    assert "Wrote" in capsys.readouterr().out

    m1, m2 = from_json_file(path), from_json_file(path)
    assert m2.encrypt(m1.encrypt("SECRETMESSAGE")) == "SECRETMESSAGE"

    main.main(["--config", str(path), "-m", "Secret message!", "--block", "0"])
    assert "Decrypted: SECRETMESSAGE" in capsys.readouterr().out


def test_generator_rejects_too_many_pairs(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        settings_generator.main(["--outfile", str(tmp_path / "x.json"), "--pairs", "14"])


def test_main_invalid_utf8_config_exits(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_bytes(b'[{"type": "rotor\xff"}]')
    with pytest.raises(SystemExit, match="Failed to build machine"):
        main.main(["-m", "hi", "--config", str(path)])


def test_main_repl_stops_at_end_of_input(monkeypatch, capsys):
    answers = iter(["attack"])

    def fake_input(_prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)
    main.main(["--block", "0"])
    assert "Decrypted: ATTACK" in capsys.readouterr().out
