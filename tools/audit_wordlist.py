# Copyright (c) 2026 Signer — MIT License

"""Audit a passphrase word list against the pre-generation estimate assumptions.

The live estimate assumes 5 letters per word, 3 of them leet-eligible with
an average candidate set of 1.5. This reports what the list actually looks
like so drift between the estimate and real generations can be spotted.

Usage: python tools/audit_wordlist.py [wordlist.json]
"""
import math
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(SCRIPT_DIR)

sys.path.insert(0, PROJECT_DIR)

import passgen  # noqa: E402


def audit(words):
    """Return a dict of word-list statistics."""
    letters = sum(len(w) for w in words)
    eligible = [c for w in words for c in w if c in passgen.LEET_MAP]
    lengths = {}
    for w in words:
        lengths[len(w)] = lengths.get(len(w), 0) + 1

    avg_candidates = (
        sum(len(passgen.LEET_MAP[c]) + 1 for c in eligible) / len(eligible)
        if eligible else 0.0
    )
    return {
        "size": len(words),
        "bits_per_word": math.log2(len(words)) if words else 0.0,
        "avg_letters": letters / len(words) if words else 0.0,
        "leet_fraction": len(eligible) / letters if letters else 0.0,
        "leet_per_word": len(eligible) / len(words) if words else 0.0,
        "avg_leet_candidates": avg_candidates,
        "shortest": min((len(w) for w in words), default=0),
        "longest": max((len(w) for w in words), default=0),
        "lengths": dict(sorted(lengths.items())),
        "duplicates": len(words) - len(set(words)),
    }


def print_report(stats):
    print("=" * 70)
    print("WORD LIST AUDIT")
    print("=" * 70)
    print(f"  Words:                 {stats['size']}")
    print(f"  Bits per word:         {stats['bits_per_word']:.2f}")
    print(f"  Duplicates:            {stats['duplicates']}")
    print(f"  Shortest / longest:    {stats['shortest']} / {stats['longest']}")
    print(f"  Avg letters per word:  {stats['avg_letters']:.2f}"
          f"  (estimate assumes {passgen.EST_LETTERS_PER_WORD})")
    print(f"  Leet-eligible letters: {stats['leet_fraction']:.1%}")
    print(f"  Leet-eligible / word:  {stats['leet_per_word']:.2f}"
          f"  (estimate assumes {passgen.EST_LEET_LETTERS_PER_WORD})")
    print(f"  Avg leet candidates:   {stats['avg_leet_candidates']:.2f}"
          f"  (estimate assumes {passgen.EST_LEET_CANDIDATES:.2f})")

    print("\n" + "=" * 70)
    print("LENGTH DISTRIBUTION")
    print("=" * 70)
    for length, count in stats["lengths"].items():
        bar = "#" * max(1, round(50 * count / stats["size"]))
        print(f"  {length:2d} chars  {count:5d}  {bar}")


if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else passgen.WORDLIST_FILE
    words = passgen.load_wordlist(path)
    print_report(audit(words))
