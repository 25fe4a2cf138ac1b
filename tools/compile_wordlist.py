# Copyright (c) 2026 Signer — MIT License

"""
Compile a plain-text word source into the passphrase word list.

Reads one word per line (blank lines and lines starting with '#' are
ignored), normalizes every entry, keeps only words that are safe to type
and count, drops duplicates, and saves assets/wordlist.json.

Handles:
  - NFKC normalization (full-width → regular, ligatures → letters, etc.)
  - Zero-width character removal (ZWJ, ZWNJ, soft hyphens, BOM, etc.)
  - Case insensitive: all words stored lowercase
  - Accepted words: ASCII letters only, MIN_LEN..MAX_LEN characters
  - Duplicates: first occurrence wins (every word must be a distinct outcome)

Usage: python tools/compile_wordlist.py [source.txt] [output.json]
"""

import json
import os
import re
import sys
import unicodedata

# Zero-width and invisible characters to strip from all input
_INVISIBLE_CHARS = re.compile(
    "["
    "\u200b"   # zero-width space
    "\u200c"   # zero-width non-joiner
    "\u200d"   # zero-width joiner
    "\u200e"   # left-to-right mark
    "\u200f"   # right-to-left mark
    "\u00ad"   # soft hyphen
    "\u034f"   # combining grapheme joiner
    "\ufeff"   # BOM / zero-width no-break space
    "\u2060"   # word joiner
    "]"
)

_ACCEPTED = re.compile(r"^[a-z]+$")

MIN_LEN = 3
MAX_LEN = 9

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(SCRIPT_DIR)
SOURCE_FILE = os.path.join(SCRIPT_DIR, "wordlist_source.txt")
OUTPUT_FILE = os.path.join(PROJECT_DIR, "assets", "wordlist.json")

sys.path.insert(0, PROJECT_DIR)

from passgen import MIN_WORDLIST_SIZE  # noqa: E402


def normalize(word):
    """Normalize a word for the list.

    1. Strip whitespace
    2. Remove zero-width / invisible characters
    3. NFKC normalize (full-width → regular, ligatures → letters, etc.)
    4. Lowercase
    """
    w = word.strip()
    w = _INVISIBLE_CHARS.sub("", w)
    w = unicodedata.normalize("NFKC", w)
    return w.lower()


def is_accepted(word):
    return MIN_LEN <= len(word) <= MAX_LEN and bool(_ACCEPTED.match(word))


def build_wordlist(lines):
    """Turn raw source lines into (words, rejected, duplicates).

    words is the ordered list of distinct accepted words; rejected and
    duplicates are the normalized entries that were dropped.
    """
    words = []
    seen = set()
    rejected = []
    duplicates = []
    for line in lines:
        raw = line.strip()
        if not raw or raw.startswith("#"):
            continue
        w = normalize(raw)
        if not is_accepted(w):
            rejected.append(w)
            continue
        if w in seen:
            duplicates.append(w)
            continue
        seen.add(w)
        words.append(w)
    return words, rejected, duplicates


def compile_wordlist(source=SOURCE_FILE, output=OUTPUT_FILE):
    if not os.path.isfile(source):
        print(f"ERROR: source file not found: {source}")
        return False

    with open(source, "r", encoding="utf-8") as f:
        words, rejected, duplicates = build_wordlist(f)

    print(f"Read {source}")
    print(f"  accepted:   {len(words)}")
    print(f"  rejected:   {len(rejected)}")
    print(f"  duplicates: {len(duplicates)}")

    if rejected:
        print("\nRejected entries (need ASCII letters, "
              f"{MIN_LEN}-{MAX_LEN} characters):")
        for w in rejected[:20]:
            print(f"    {w!r}")
        if len(rejected) > 20:
            print(f"    ... and {len(rejected) - 20} more")

    if len(words) < MIN_WORDLIST_SIZE:
        print(f"\nERROR: only {len(words)} words, need at least {MIN_WORDLIST_SIZE}.")
        print("Nothing written.")
        return False

    os.makedirs(os.path.dirname(output) or ".", exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(words, f, ensure_ascii=False, indent=1)
        f.write("\n")

    size_kb = os.path.getsize(output) / 1024
    print(f"\nSaved {output}")
    print(f"  {len(words)} words, {size_kb:.1f} KB")
    return True


if __name__ == "__main__":
    src = sys.argv[1] if len(sys.argv) > 1 else SOURCE_FILE
    out = sys.argv[2] if len(sys.argv) > 2 else OUTPUT_FILE
    ok = compile_wordlist(src, out)
    sys.exit(0 if ok else 1)
