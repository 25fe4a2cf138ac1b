# Copyright (c) 2026 Signer — MIT License

"""Tests for word list loading, validation and the embedded fallback."""

import json
import os

import pytest

import passgen
from passgen import (
    FALLBACK_WORDS, MIN_WORDLIST_SIZE, find_wordlist_file, get_wordlist, load_wordlist,
)


def _write(tmp_path, payload, name="words.json"):
    path = tmp_path / name
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return str(path)


class TestLoadWordlist:
    def test_valid_file_is_normalized(self, tmp_path, capsys):
        words = [" Apple ", "apple", "BEE", "", "cat", "dune", "echo", "fern",
                 "gale", "hush", "iris", "jolt", "kite"]
        result = load_wordlist(_write(tmp_path, words))
        assert result == ("apple", "bee", "cat", "dune", "echo", "fern",
                          "gale", "hush", "iris", "jolt", "kite")
        assert isinstance(result, tuple)
        assert "[wordlist] loaded 11 words" in capsys.readouterr().out

    @pytest.mark.parametrize("payload", [
        "{not json",
        json.dumps({"words": ["a", "b"]}),
        json.dumps("just a string"),
        json.dumps([f"w{i}" for i in range(MIN_WORDLIST_SIZE - 1)]),
        json.dumps(["alpha", "beta", 3, "delta"] + [f"w{i}" for i in range(10)]),
        json.dumps(["same"] * 50),
    ])
    def test_bad_content_falls_back(self, tmp_path, capsys, payload):
        assert load_wordlist(_write(tmp_path, payload)) is FALLBACK_WORDS
        assert "[wordlist] external list rejected" in capsys.readouterr().out

    def test_missing_file_falls_back(self, tmp_path, capsys):
        assert load_wordlist(str(tmp_path / "absent.json")) is FALLBACK_WORDS
        assert "embedded fallback" in capsys.readouterr().out

    def test_undecodable_file_falls_back(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'["caf\xe9"]')
        assert load_wordlist(str(path)) is FALLBACK_WORDS

    def test_exactly_minimum_size_is_accepted(self, tmp_path):
        words = [f"w{i}" for i in range(MIN_WORDLIST_SIZE)]
        assert len(load_wordlist(_write(tmp_path, words))) == MIN_WORDLIST_SIZE

    def test_shipped_list(self):
        words = load_wordlist()
        assert words is not FALLBACK_WORDS
        assert len(words) > len(FALLBACK_WORDS)
        assert len(set(words)) == len(words)
        assert all(w == w.strip().lower() and w.isalpha() for w in words)


class TestFallback:
    def test_size_and_distinct(self):
        assert len(FALLBACK_WORDS) == 200
        assert len(set(FALLBACK_WORDS)) == 200

    def test_lowercase_letters(self):
        assert all(w.isalpha() and w == w.lower() for w in FALLBACK_WORDS)


class TestProcessWordlist:
    def test_loaded_once(self, monkeypatch):
        calls = []

        def fake_load(path=None):
            calls.append(path)
            return ("one", "two", "three")

        monkeypatch.setattr(passgen, "_WORDLIST", None)
        monkeypatch.setattr(passgen, "load_wordlist", fake_load)
        first = get_wordlist()
        second = get_wordlist()
        assert first == ("one", "two", "three")
        assert second is first
        assert len(calls) == 1

    def test_used_when_no_wordlist_given(self, monkeypatch, replay):
        monkeypatch.setattr(passgen, "_WORDLIST", ("solo", "duet") + ("x",) * 8)
        secret = passgen.generate_passphrase(2, sampler=replay([1], repeat=True))
        assert secret.text == "duet-duet"
        assert secret.record.wordlist_size == 10


class TestWordlistLocation:
    def _make(self, directory, *parts):
        target = directory.joinpath(*parts)
        target.parent.mkdir(parents=True)
        target.write_text(json.dumps([f"w{i}" for i in range(12)]), encoding="utf-8")
        return str(target)

    def test_checkout_copy_preferred(self, tmp_path):
        local = self._make(tmp_path / "src", "assets", "wordlist.json")
        self._make(tmp_path / "prefix", "share", "passgen", "wordlist.json")
        assert find_wordlist_file(str(tmp_path / "src"), str(tmp_path / "prefix")) == local

    def test_installed_data_copy(self, tmp_path):
        installed = self._make(tmp_path / "prefix", "share", "passgen", "wordlist.json")
        (tmp_path / "site").mkdir()
        found = find_wordlist_file(str(tmp_path / "site"), str(tmp_path / "prefix"))
        assert found == installed
        assert len(load_wordlist(found)) == 12

    def test_neither_present(self, tmp_path):
        found = find_wordlist_file(str(tmp_path / "site"), str(tmp_path / "prefix"))
        assert found == str(tmp_path / "site" / "assets" / "wordlist.json")
        assert load_wordlist(found) is FALLBACK_WORDS

    def test_shipped_list_is_found(self):
        assert os.path.isfile(passgen.WORDLIST_FILE)
