# Copyright (c) 2026 Signer — MIT License

__version__ = "1.0"

"""Password and passphrase generation with exact entropy accounting.

Two kinds of secrets are produced from a cryptographically secure source:
- Character passwords: fixed-length strings drawn from a chosen alphabet
- Passphrases: words from a word list, optionally transformed by random
  capitalization, leet substitution, and inserted digits/symbols

Every random choice made during generation is recorded in an immutable
consumption record. The reported bits of entropy are computed from that
record alone, so they always match the randomness that was actually spent.
A cheaper estimate (population averages instead of a record) is available
before anything is generated.

Randomness:
    All draws go through SecureSampler, which reads 32-bit values from
    secrets.token_bytes and rejects raw values that would bias the result
    of the modulo reduction. Nothing else in this module touches a random
    source.

Crack time:
    Bits are converted to a human label in log space, so even 256+ bit
    secrets at one guess per second never overflow a float.

Usage:
    from passgen import generate_password, generate_passphrase, format_crack_time
    pw = generate_password(16, symbols=False)       # GeneratedSecret
    pw.text, pw.bits                                # ("k3Tq...", 95.27)
    pp = generate_passphrase(4, capitalize=True, leet=True, insert_extras=True)
    format_crack_time(pp.bits, 1e10).label          # "≈ 3.41e12 years"
    opts = parse_options({"mode": "passphrase", "num_words": 5})
    estimate_bits(opts)                             # pre-generation estimate
    regenerate(pp)                                  # new secret, same options
"""

import json
import math
import os
import re
import secrets
import string
import struct
import sys
import threading
import time
from collections import namedtuple
from types import MappingProxyType

# ── Character sets ────────────────────────────────────────────────
LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()-_=+[]{};:,./?<>~"

# Homoglyph alternatives per lowercase letter. The original character is
# always one more candidate on top of these.
LEET_MAP = MappingProxyType({
    "a": ("4", "@"),
    "b": ("8",),
    "e": ("3",),
    "g": ("9",),
    "i": ("1", "!"),
    "l": ("1", "|"),
    "o": ("0",),
    "s": ("5", "$"),
    "t": ("7",),
    "z": ("2",),
})

# ── Generation parameters ─────────────────────────────────────────
MODES = ("character", "passphrase")
DEFAULT_LENGTH = 16
DEFAULT_WORDS = 4
MIN_WORDS = 2
MAX_WORDS = 8
DEFAULT_SEPARATOR = "-"
HINT_MAX_LEN = 12
HINT_ODDS = 5          # hint replaces a word when uniform_index(5) == 0
MAX_INSERT = 4
INSERT_SPAN = 6        # one more insertion allowed per 6 characters

# ── Crack-time parameters ─────────────────────────────────────────
DEFAULT_GUESSES_PER_SECOND = 1e10
SECONDS_PER_YEAR = 31_557_600  # Julian year
_SCIENTIFIC_LOG10_YEARS = 6    # >= 1e6 years is shown in scientific notation
_YEARS_LABEL_MIN = 60

# ── Pre-generation estimate assumptions ───────────────────────────
EST_LETTERS_PER_WORD = 5
EST_LEET_LETTERS_PER_WORD = 3   # leet-eligible letters credited per word
EST_LEET_CANDIDATES = 1.5

# ── Word list ─────────────────────────────────────────────────────
_PASSGEN_DIR = os.path.dirname(os.path.abspath(__file__))


def find_wordlist_file(module_dir=_PASSGEN_DIR, prefix=sys.prefix):
    """Locate wordlist.json: assets/ beside the module in a checkout or
    editable install, else the share/passgen/ copy a regular install puts
    under the interpreter prefix. Returns the checkout path if neither exists.
    """
    local = os.path.join(module_dir, "assets", "wordlist.json")
    installed = os.path.join(prefix, "share", "passgen", "wordlist.json")
    for path in (local, installed):
        if os.path.isfile(path):
            return path
    return local


WORDLIST_FILE = find_wordlist_file()
MIN_WORDLIST_SIZE = 10

# Embedded fallback used whenever the external list is missing or invalid
FALLBACK_WORDS = (
    "apple", "anchor", "amber", "atlas", "axiom", "beacon", "breeze", "brisk",
    "cobalt", "copper", "crimson", "crest", "dawn", "delta", "ember", "echo",
    "forge", "fable", "garnet", "glade", "hollow", "harbor", "iris", "ivory",
    "jolt", "jade", "keystone", "kismet", "lumen", "lunar", "mosaic", "matrix",
    "nebula", "native", "opal", "oracle", "pinnacle", "pioneer", "quartz", "quiet",
    "rift", "ranger", "sable", "solar", "spruce", "titan", "tracer", "umbra",
    "union", "vapor", "valiant", "woven", "whistle", "xenon", "yearn", "yonder",
    "zephyr", "zenith", "azure", "marble", "canyon", "willow", "orchid", "violet",
    "sage", "cinder", "flint", "saffron", "harvest", "meadow", "glimmer", "fusion",
    "legend", "mongoose", "poppy", "thrive", "riddle", "raven", "dune", "stride",
    "haven", "basil", "cascade", "dapper", "evolve", "frank", "grove", "ignite",
    "juno", "latch", "mirth", "nimbus", "prism", "quest", "ripple", "terra",
    "uplift", "verve", "wisp", "yarrow", "zeal", "arcade", "bravo", "caper",
    "drift", "elixir", "flute", "gale", "halt", "ion", "jewel", "knack",
    "lodge", "muse", "noir", "paragon", "quietus", "resin", "sprout", "tango",
    "undertow", "vivid", "wax", "yacht", "zest", "bloom", "citrine", "dock",
    "flare", "grotto", "isle", "kale", "lagoon", "mantle", "niche", "oath",
    "pixel", "quill", "rover", "solace", "thimble", "umbel", "vigil", "waltz",
    "xerox", "yodel", "zeppelin", "apex", "brook", "eon", "glisten", "hush",
    "koi", "lore", "maze", "nest", "olive", "peak", "quip", "rush",
    "sprig", "thaw", "ultra", "vortex", "wane", "zen", "acorn", "badge",
    "cedar", "dingo", "falcon", "gecko", "hazel", "igloo", "jasper", "kelp",
    "lilac", "maple", "nectar", "otter", "pebble", "quiver", "ridge", "summit",
    "tundra", "velvet", "walnut", "zinnia", "amble", "bramble", "comet", "dynamo",
    "fjord", "glacier", "heron", "inlet", "juniper", "kindle", "lantern", "mistral",
)

_WORDLIST = None
_WORDLIST_LOCK = threading.Lock()


# ── Records ───────────────────────────────────────────────────────
GenerationOptions = namedtuple(
    "GenerationOptions",
    [
        "mode", "length", "lower", "upper", "digits", "symbols",
        "num_words", "separator", "personal",
        "capitalize", "leet", "insert_extras",
        "guesses_per_second",
    ],
    defaults=(
        "passphrase", DEFAULT_LENGTH, True, True, True, True,
        DEFAULT_WORDS, DEFAULT_SEPARATOR, "",
        False, False, False,
        DEFAULT_GUESSES_PER_SECOND,
    ),
)

CharacterRecord = namedtuple("CharacterRecord", ["pool_size", "length"])
CapitalizationRecord = namedtuple("CapitalizationRecord", ["letters_count"])
LeetRecord = namedtuple("LeetRecord", ["choices"])
InsertionRecord = namedtuple("InsertionRecord", ["count", "choice_size", "base_len"])
PassphraseRecord = namedtuple(
    "PassphraseRecord",
    ["num_words", "wordlist_size", "capitalization", "leet", "insertion"],
    defaults=(None, None, None),
)

GeneratedSecret = namedtuple("GeneratedSecret", ["text", "mode", "record", "bits", "options"])
CrackTime = namedtuple("CrackTime", ["label", "seconds", "unit"])


class InvalidArgument(ValueError):
    """A caller broke a contract (empty range, empty choice set, bad option)."""


# ── Secure sampling ───────────────────────────────────────────────
_RANGE = 1 << 32  # raw draws are 32-bit unsigned


def _random_uint32():
    return struct.unpack("<I", secrets.token_bytes(4))[0]


class SecureSampler:
    """Uniform integers from a 32-bit CSPRNG source, without modulo bias.

    A raw value r in [0, 2**32) is only reduced modulo n when it falls
    below the largest multiple of n that fits in the range; anything at or
    above that threshold is discarded and redrawn. Every residue then has
    exactly the same number of raw values mapping to it.

    The raw source can be replaced (any callable returning ints in
    [0, 2**32)) so that a fixed draw sequence can be replayed.

    Usage:
        sampler = SecureSampler()
        sampler.uniform_index(6)        # 0..5
        sampler.choice("abc")           # "a", "b" or "c"
    """

    def __init__(self, source=None):
        self._source = source or _random_uint32

    def uniform_index(self, n):
        """Return an integer in [0, n) drawn uniformly at random.

        Raises:
            InvalidArgument: If n is not a positive integer.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            raise InvalidArgument(f"range must be a positive integer, got {n!r}")
        threshold = _RANGE - (_RANGE % n)
        while True:
            raw = self._source()
            if raw < threshold:
                return raw % n

    def choice(self, seq):
        """Return one element of a non-empty sequence, uniformly."""
        if not seq:
            raise InvalidArgument("cannot choose from an empty sequence")
        return seq[self.uniform_index(len(seq))]


_SAMPLER = SecureSampler()


# ── Word list ─────────────────────────────────────────────────────
def _validate_wordlist(data):
    """Normalize a parsed JSON word list, or raise ValueError.

    Entries are stripped and lowercased; empty entries and duplicates are
    dropped (first occurrence wins) so every remaining word is a distinct
    outcome.
    """
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    words = []
    seen = set()
    for entry in data:
        if not isinstance(entry, str):
            raise ValueError(f"non-string entry {entry!r}")
        w = entry.strip().lower()
        if not w or w in seen:
            continue
        seen.add(w)
        words.append(w)
    if len(words) < MIN_WORDLIST_SIZE:
        raise ValueError(f"only {len(words)} usable words (need {MIN_WORDLIST_SIZE})")
    return tuple(words)


def load_wordlist(path=None):
    """Read a word list from a JSON array file, falling back on any failure.

    Args:
        path: JSON file to read. Defaults to assets/wordlist.json next to
              this module.

    Returns:
        Tuple of distinct lowercase words. FALLBACK_WORDS if the file is
        missing, unreadable, not a JSON array of strings, or has fewer than
        MIN_WORDLIST_SIZE usable words.
    """
    t0 = time.perf_counter()
    path = path or WORDLIST_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            words = _validate_wordlist(json.load(f))
    except (OSError, ValueError) as exc:
        elapsed = (time.perf_counter() - t0) * 1000
        print(f"  [wordlist] external list rejected ({exc}), "
              f"using embedded fallback of {len(FALLBACK_WORDS)} words  ({elapsed:.2f}ms)")
        return FALLBACK_WORDS
    elapsed = (time.perf_counter() - t0) * 1000
    print(f"  [wordlist] loaded {len(words)} words from {path}  ({elapsed:.2f}ms)")
    return words


def get_wordlist():
    """Return the process-wide word list, loading it on first use."""
    global _WORDLIST
    with _WORDLIST_LOCK:
        if _WORDLIST is None:
            _WORDLIST = load_wordlist()
        return _WORDLIST


# ── Character passwords ───────────────────────────────────────────
def char_pool(lower=True, upper=True, digits=True, symbols=True):
    """Concatenate the enabled character subsets (lower, upper, digits, symbols)."""
    parts = []
    if lower:
        parts.append(LOWERCASE)
    if upper:
        parts.append(UPPERCASE)
    if digits:
        parts.append(DIGITS)
    if symbols:
        parts.append(SYMBOLS)
    return "".join(parts)


def char_pool_size(lower=True, upper=True, digits=True, symbols=True):
    return len(char_pool(lower, upper, digits, symbols))


def _check_length(length):
    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        raise InvalidArgument(f"length must be a positive integer, got {length!r}")


def generate_password(length=DEFAULT_LENGTH, lower=True, upper=True, digits=True,
                      symbols=True, sampler=None):
    """Generate a character password with every position drawn independently.

    An empty pool (all four subsets disabled) is not an error: the result
    has empty text and zero bits so a front-end can tell the user.

    Args:
        length: Number of characters (>= 1).
        lower, upper, digits, symbols: Which subsets make up the alphabet.
        sampler: SecureSampler to draw from (module default if None).

    Returns:
        GeneratedSecret with a CharacterRecord.
    """
    _check_length(length)
    sampler = sampler or _SAMPLER
    options = GenerationOptions(
        mode="character", length=length,
        lower=lower, upper=upper, digits=digits, symbols=symbols,
    )
    alphabet = char_pool(lower, upper, digits, symbols)
    record = CharacterRecord(pool_size=len(alphabet), length=length)
    if not alphabet:
        return GeneratedSecret("", "character", record, 0.0, options)

    text = "".join(sampler.choice(alphabet) for _ in range(length))
    return GeneratedSecret(text, "character", record, bits_for_record(record), options)


# ── Passphrase pipeline ───────────────────────────────────────────
def normalize_hint(personal):
    """Whitespace removed, first HINT_MAX_LEN characters, lowercased."""
    if not personal:
        return ""
    return re.sub(r"\s+", "", personal)[:HINT_MAX_LEN].lower()


def select_words(num_words, wordlist, personal="", sampler=None):
    """Pick num_words words; each may be replaced by the personal hint.

    The 1-in-HINT_ODDS draw only happens when a usable hint (longer than
    one character after normalization) was supplied.
    """
    sampler = sampler or _SAMPLER
    hint = normalize_hint(personal)
    words = []
    for _ in range(num_words):
        if len(hint) > 1 and sampler.uniform_index(HINT_ODDS) == 0:
            words.append(hint)
        else:
            words.append(sampler.choice(wordlist))
    return words


def randomize_capitalization(text, sampler=None):
    """Flip a fair coin for every ASCII letter: 1 -> upper, 0 -> lower.

    Returns:
        (text, CapitalizationRecord) where each counted letter is 1 bit.
    """
    sampler = sampler or _SAMPLER
    out = []
    letters = 0
    for ch in text:
        if ch in string.ascii_letters:
            letters += 1
            out.append(ch.upper() if sampler.uniform_index(2) == 1 else ch.lower())
        else:
            out.append(ch)
    return "".join(out), CapitalizationRecord(letters)


def apply_leet(text, sampler=None):
    """Replace substitutable letters with a uniformly chosen candidate.

    The candidate set of a character is itself plus its LEET_MAP
    alternatives, so keeping the original is one of the counted outcomes.

    Returns:
        (text, LeetRecord) with one candidate-set size per substitutable
        character, in text order.
    """
    sampler = sampler or _SAMPLER
    out = []
    choices = []
    for ch in text:
        alternatives = LEET_MAP.get(ch.lower())
        if alternatives:
            candidates = (ch,) + alternatives
            out.append(sampler.choice(candidates))
            choices.append(len(candidates))
        else:
            out.append(ch)
    return "".join(out), LeetRecord(tuple(choices))


def max_insertions(base_len):
    return min(MAX_INSERT, max(1, math.ceil(base_len / INSERT_SPAN)))


def insert_extras(text, digits=True, symbols=True, sampler=None):
    """Insert 1..max_insertions(len(text)) digits and/or symbols at random slots.

    All values are drawn first (a fair coin picks digit or symbol when both
    classes are enabled), then each one is spliced into a slot chosen among
    the len(current) + 1 positions of the growing string.

    Returns:
        (text, InsertionRecord) holding the insertion count, the size of the
        value set (10, 27 or 37) and the pre-insertion length.

    Raises:
        InvalidArgument: If both classes are disabled.
    """
    if not (digits or symbols):
        raise InvalidArgument("insert_extras needs digits, symbols, or both")
    sampler = sampler or _SAMPLER
    base_len = len(text)
    count = 1 + sampler.uniform_index(max_insertions(base_len))

    values = []
    for _ in range(count):
        if digits and symbols:
            use_symbol = sampler.uniform_index(2) == 1
        else:
            use_symbol = symbols
        values.append(sampler.choice(SYMBOLS) if use_symbol else sampler.choice(DIGITS))

    chars = list(text)
    for value in values:
        chars.insert(sampler.uniform_index(len(chars) + 1), value)

    choice_size = (len(DIGITS) if digits else 0) + (len(SYMBOLS) if symbols else 0)
    return "".join(chars), InsertionRecord(count, choice_size, base_len)


# Fixed stage order; each stage maps text -> (text, record)
_STAGES = (
    ("capitalize", randomize_capitalization),
    ("leet", apply_leet),
    ("insert_extras", insert_extras),
)


def generate_passphrase(num_words=DEFAULT_WORDS, separator=DEFAULT_SEPARATOR, personal="",
                        capitalize=False, leet=False, insert_extras=False,
                        wordlist=None, sampler=None):
    """Generate a passphrase: select words, then capitalize -> leet -> insert.

    Args:
        num_words: Word count, MIN_WORDS..MAX_WORDS.
        separator: String placed between words.
        personal: Optional hint that may stand in for a word.
        capitalize, leet, insert_extras: Which transform stages run.
        wordlist: Sequence of words (process-wide list if None).
        sampler: SecureSampler to draw from (module default if None).

    Returns:
        GeneratedSecret with a PassphraseRecord.

    Raises:
        InvalidArgument: If num_words is out of range.
    """
    if isinstance(num_words, bool) or not isinstance(num_words, int) \
            or not MIN_WORDS <= num_words <= MAX_WORDS:
        raise InvalidArgument(f"num_words must be {MIN_WORDS}..{MAX_WORDS}, got {num_words!r}")
    sampler = sampler or _SAMPLER
    if wordlist is None:
        wordlist = get_wordlist()
    if separator is None:
        separator = DEFAULT_SEPARATOR

    text = separator.join(select_words(num_words, wordlist, personal, sampler))

    enabled = {"capitalize": capitalize, "leet": leet, "insert_extras": insert_extras}
    records = {}
    for name, stage in _STAGES:
        if enabled[name]:
            text, records[name] = stage(text, sampler=sampler)

    record = PassphraseRecord(
        num_words=num_words,
        wordlist_size=len(wordlist),
        capitalization=records.get("capitalize"),
        leet=records.get("leet"),
        insertion=records.get("insert_extras"),
    )
    options = GenerationOptions(
        mode="passphrase", num_words=num_words, separator=separator,
        personal=personal or "", capitalize=bool(capitalize), leet=bool(leet),
        insert_extras=bool(insert_extras),
    )
    return GeneratedSecret(text, "passphrase", record, bits_for_record(record), options)


# ── Entropy ───────────────────────────────────────────────────────
def log2_ncr(n, k):
    """log2 of the binomial coefficient C(n, k), never materializing C(n, k).

    Uses log2 C(n,k) = sum_{i=1..k} log2((n-k+i)/i) with k folded to
    min(k, n-k). Returns -inf when k < 0 or k > n.
    """
    if k < 0 or k > n:
        return float("-inf")
    k = min(k, n - k)
    total = 0.0
    for i in range(1, k + 1):
        total += math.log2((n - k + i) / i)
    return total


def bits_for_character_mode(length, pool_size):
    if pool_size <= 0:
        return 0.0
    return length * math.log2(pool_size)


def bits_for_insertion(count, choice_size, base_len):
    """Value choices plus the arrangement of count slots among base_len + count.

    The draw of count itself is not credited.
    """
    return count * math.log2(choice_size) + log2_ncr(base_len + count, count)


def bits_for_passphrase(record):
    """Exact passphrase entropy from a PassphraseRecord.

    words:      num_words * log2(W)
    capitalize: 1 bit per letter
    leet:       log2(candidate-set size) per substitutable character
    insertion:  see bits_for_insertion
    """
    if record.wordlist_size <= 0:
        return 0.0
    bits = record.num_words * math.log2(record.wordlist_size)
    if record.capitalization is not None:
        bits += record.capitalization.letters_count * 1.0
    if record.leet is not None:
        bits += sum(math.log2(size) for size in record.leet.choices)
    if record.insertion is not None and record.insertion.count:
        ins = record.insertion
        bits += bits_for_insertion(ins.count, ins.choice_size, ins.base_len)
    return bits


def bits_for_record(record):
    """Dispatch on the record type (CharacterRecord or PassphraseRecord)."""
    if isinstance(record, CharacterRecord):
        return bits_for_character_mode(record.length, record.pool_size)
    if isinstance(record, PassphraseRecord):
        return bits_for_passphrase(record)
    raise InvalidArgument(f"unknown consumption record {type(record).__name__}")


def estimate_bits(options, wordlist_size=None):
    """Entropy estimate for options before anything has been generated.

    Character mode is already exact. Passphrase mode follows the same
    formula as bits_for_passphrase but with assumed averages: 5 letters
    per word, 3 leet-eligible letters per word with an average candidate
    set of 1.5, and an insertion count of max_insertions() over the
    estimated length. The personal hint is ignored.

    Args:
        options: GenerationOptions.
        wordlist_size: W (size of the process-wide list if None).

    Returns:
        Estimated bits as a float.
    """
    if options.mode == "character":
        pool = char_pool_size(options.lower, options.upper, options.digits, options.symbols)
        return bits_for_character_mode(options.length, pool)
    if options.mode != "passphrase":
        raise InvalidArgument(f"unknown mode {options.mode!r}")

    if wordlist_size is None:
        wordlist_size = len(get_wordlist())
    num_words = options.num_words
    letters = EST_LETTERS_PER_WORD * num_words
    bits = num_words * math.log2(wordlist_size)
    if options.capitalize:
        bits += letters * 1.0
    if options.leet:
        bits += EST_LEET_LETTERS_PER_WORD * num_words * math.log2(EST_LEET_CANDIDATES)
    if options.insert_extras:
        base_len = letters + (num_words - 1) * len(options.separator or "")
        k = max_insertions(base_len)
        bits += bits_for_insertion(k, len(DIGITS) + len(SYMBOLS), base_len)
    return bits


# ── Crack time ────────────────────────────────────────────────────
def format_crack_time(bits, guesses_per_second=DEFAULT_GUESSES_PER_SECOND):
    """Convert bits of entropy into a human time-to-exhaust label.

    Works in log10 space throughout. Below 1e6 years the seconds value is
    materialized and the coarsest fitting unit is used (years from 60 up,
    then days, hours, minutes). From 1e6 years on the label is scientific
    notation and seconds is None, since 10**log10_seconds may not fit a
    float.

    Returns:
        CrackTime(label, seconds, unit), unit one of "second", "minutes",
        "hours", "days", "years", "scientific".

    Raises:
        InvalidArgument: If guesses_per_second is not positive.
    """
    if not guesses_per_second > 0:
        raise InvalidArgument(f"guesses_per_second must be > 0, got {guesses_per_second!r}")
    if bits <= 0:
        return CrackTime("<1 second", 0.0, "second")

    log10_seconds = bits * math.log10(2) - math.log10(guesses_per_second)
    if log10_seconds < 0:
        return CrackTime("<1 second", 10 ** log10_seconds, "second")

    log10_years = log10_seconds - math.log10(SECONDS_PER_YEAR)
    if log10_years < _SCIENTIFIC_LOG10_YEARS:
        seconds = 10 ** log10_seconds
        years = seconds / SECONDS_PER_YEAR
        if years >= _YEARS_LABEL_MIN:
            return CrackTime(f"{years:.2f} years", seconds, "years")
        for unit, size in (("days", 86400), ("hours", 3600)):
            if seconds / size >= 1:
                return CrackTime(f"{seconds / size:.2f} {unit}", seconds, unit)
        return CrackTime(f"{seconds / 60:.2f} minutes", seconds, "minutes")

    exponent = math.floor(log10_years)
    mantissa = 10 ** (log10_years - exponent)
    return CrackTime(f"≈ {mantissa:.2f}e{exponent} years", None, "scientific")


# ── Options ───────────────────────────────────────────────────────
_TRUE_STRINGS = frozenset(("1", "true", "yes", "on"))
_FALSE_STRINGS = frozenset(("", "0", "false", "no", "off"))


def _parse_flag(value, default):
    """Checkbox value: bools and numbers as-is, form strings by name."""
    if value is None:
        return default
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_STRINGS:
            return True
        if word in _FALSE_STRINGS:
            return False
        return default
    return bool(value)


def _parse_int(value, default):
    try:
        n = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return n or default


def parse_guess_rate(value):
    """Guesses per second; DEFAULT_GUESSES_PER_SECOND if absent, non-numeric or <= 0."""
    try:
        rate = float(value)
    except (TypeError, ValueError):
        return DEFAULT_GUESSES_PER_SECOND
    if not math.isfinite(rate) or rate <= 0:
        return DEFAULT_GUESSES_PER_SECOND
    return rate


def parse_options(raw=None):
    """Build GenerationOptions from a loosely typed dict (form values).

    Missing or unparseable values fall back to defaults, num_words is
    clamped to MIN_WORDS..MAX_WORDS, and the hint is stripped. Flags take
    bools, numbers, or the strings true/false, yes/no, on/off, 1/0.

    Raises:
        InvalidArgument: If mode is not "character" or "passphrase".
    """
    raw = raw or {}
    mode = raw.get("mode") or "passphrase"
    if mode not in MODES:
        raise InvalidArgument(f"mode must be one of {MODES}, got {mode!r}")

    length = _parse_int(raw.get("length"), DEFAULT_LENGTH)
    if length < 1:
        length = DEFAULT_LENGTH
    num_words = min(MAX_WORDS, max(MIN_WORDS, _parse_int(raw.get("num_words"), DEFAULT_WORDS)))
    separator = raw.get("separator")
    if separator is None:
        separator = DEFAULT_SEPARATOR

    return GenerationOptions(
        mode=mode,
        length=length,
        lower=_parse_flag(raw.get("lower"), True),
        upper=_parse_flag(raw.get("upper"), True),
        digits=_parse_flag(raw.get("digits"), True),
        symbols=_parse_flag(raw.get("symbols"), True),
        num_words=num_words,
        separator=str(separator),
        personal=str(raw.get("personal") or "").strip(),
        capitalize=_parse_flag(raw.get("capitalize"), False),
        leet=_parse_flag(raw.get("leet"), False),
        insert_extras=_parse_flag(raw.get("insert_extras"), False),
        guesses_per_second=parse_guess_rate(raw.get("guesses_per_second")),
    )


# ── Generation entry points ───────────────────────────────────────
def generate(options, wordlist=None, sampler=None):
    """Generate a fresh secret for options (either mode).

    The returned GeneratedSecret carries options unchanged, including the
    guess rate, so it can be passed to regenerate().
    """
    t0 = time.perf_counter()
    if options.mode == "character":
        secret = generate_password(
            options.length, options.lower, options.upper, options.digits, options.symbols,
            sampler=sampler,
        )
    elif options.mode == "passphrase":
        secret = generate_passphrase(
            options.num_words, options.separator, options.personal,
            options.capitalize, options.leet, options.insert_extras,
            wordlist=wordlist, sampler=sampler,
        )
    else:
        raise InvalidArgument(f"unknown mode {options.mode!r}")
    elapsed = (time.perf_counter() - t0) * 1000
    print(f"  [generate] {options.mode} -> {secret.bits:.2f} bits  ({elapsed:.2f}ms)")
    return secret._replace(options=options)


def regenerate(secret, wordlist=None, sampler=None):
    """A brand-new secret with the same options; secret itself is untouched."""
    return generate(secret.options, wordlist=wordlist, sampler=sampler)


# ── Sampler self-test ─────────────────────────────────────────────
def _chi2_critical(df, z):
    """Upper chi-squared quantile via the Wilson-Hilferty approximation."""
    h = 2.0 / (9.0 * df)
    return df * (1.0 - h + z * math.sqrt(h)) ** 3


def verify_sampler(n=251, draws=100_000, sampler=None, alpha_z=3.09):
    """Chi-squared goodness-of-fit of uniform_index(n) against uniform.

    Draws `draws` indexes in [0, n) and compares the observed counts with
    draws / n per bucket. The critical value is the Wilson-Hilferty
    approximation for n - 1 degrees of freedom at the one-sided normal
    quantile alpha_z (3.09 ~ alpha 0.001).

    Args:
        n: Range size (>= 2). Non-powers of two are the interesting case.
        draws: Number of samples; keep draws / n well above 5.
        sampler: Object with uniform_index(n) (module sampler if None).
        alpha_z: Normal quantile of the significance level.

    Returns:
        dict with "pass", "n", "draws", "df", "chi2", "threshold",
        "detail" and a human-readable "summary".

    Usage:
        result = verify_sampler(7)
        print(result["summary"])
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 2:
        raise InvalidArgument(f"n must be an integer >= 2, got {n!r}")
    if draws < n:
        raise InvalidArgument(f"need at least n draws, got {draws}")
    sampler = sampler or _SAMPLER
    t0 = time.perf_counter()

    observed = [0] * n
    for _ in range(draws):
        observed[sampler.uniform_index(n)] += 1

    expected = draws / n
    chi2 = sum((o - expected) ** 2 / expected for o in observed)
    df = n - 1
    threshold = _chi2_critical(df, alpha_z)
    passed = chi2 < threshold
    elapsed = (time.perf_counter() - t0) * 1000

    detail = f"chi2={chi2:.2f} (threshold {threshold:.2f}, df={df}), expected/bin={expected:.2f}"
    lines = [
        f"Sampler verification: {'PASS' if passed else 'FAIL'}",
        f"Range: {n}, Draws: {draws}",
        f"  [{'+' if passed else '!'}] {'chi_squared':<20s} {detail}",
    ]
    if not passed:
        lines.append("")
        lines.append("WARNING: Biased sampler detected. Do NOT generate secrets with it.")
    print(f"  [verify] n={n} draws={draws} chi2={chi2:.2f}  ({elapsed:.2f}ms)")

    return {
        "pass": passed,
        "n": n,
        "draws": draws,
        "df": df,
        "chi2": round(chi2, 2),
        "threshold": round(threshold, 2),
        "detail": detail,
        "summary": "\n".join(lines),
    }
