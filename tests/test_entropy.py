# Copyright (c) 2026 Signer — MIT License

"""Tests for the entropy model: exact bits from records and the live estimate."""

import math

import pytest

from passgen import (
    DIGITS, SYMBOLS, CapitalizationRecord, CharacterRecord, GenerationOptions,
    InsertionRecord, InvalidArgument, LeetRecord, PassphraseRecord, bits_for_passphrase,
    bits_for_record, estimate_bits, log2_ncr,
)


class TestLog2Ncr:
    def test_matches_exact_binomial(self):
        for n in range(0, 41):
            for k in range(0, n + 1):
                assert 2 ** log2_ncr(n, k) == pytest.approx(math.comb(n, k), rel=1e-9)

    @pytest.mark.parametrize("n, k", [(5, -1), (5, 6), (0, 1), (10, 100)])
    def test_out_of_range_is_negative_infinity(self, n, k):
        assert log2_ncr(n, k) == float("-inf")

    def test_symmetric(self):
        assert log2_ncr(30, 4) == pytest.approx(log2_ncr(30, 26))

    def test_large_arguments_stay_finite(self):
        value = log2_ncr(100_000, 50_000)
        assert math.isfinite(value)
        assert value == pytest.approx(math.log2(math.comb(100_000, 50_000)), rel=1e-9)


class TestPassphraseBits:
    def test_words_only(self):
        assert bits_for_passphrase(PassphraseRecord(3, 200)) == pytest.approx(22.9316, abs=1e-4)

    def test_capitalization_adds_letter_count(self):
        base = bits_for_passphrase(PassphraseRecord(3, 200))
        record = PassphraseRecord(3, 200, capitalization=CapitalizationRecord(14))
        assert bits_for_passphrase(record) == pytest.approx(base + 14)

    def test_leet_adds_log_of_each_candidate_set(self):
        record = PassphraseRecord(2, 16, leet=LeetRecord((2, 3, 2)))
        assert bits_for_passphrase(record) == pytest.approx(8 + 1 + math.log2(3) + 1)

    def test_kept_as_original_still_counts(self):
        # a one-candidate set would mean no choice; every recorded set has >= 2
        record = PassphraseRecord(2, 16, leet=LeetRecord((2,)))
        assert bits_for_passphrase(record) > bits_for_passphrase(PassphraseRecord(2, 16))

    def test_insertion_values_and_positions(self):
        record = PassphraseRecord(2, 16, insertion=InsertionRecord(3, 37, 20))
        expected = 8 + 3 * math.log2(37) + math.log2(math.comb(23, 3))
        assert bits_for_passphrase(record) == pytest.approx(expected)

    def test_insertion_count_choice_is_not_credited(self):
        # same record whether k came from a range of 1 or 4
        a = PassphraseRecord(2, 16, insertion=InsertionRecord(1, 10, 5))
        assert bits_for_passphrase(a) == pytest.approx(8 + math.log2(10) + math.log2(6))

    def test_all_contributions_add_up(self):
        record = PassphraseRecord(
            4, 1024,
            capitalization=CapitalizationRecord(20),
            leet=LeetRecord((3, 2, 2)),
            insertion=InsertionRecord(2, 27, 23),
        )
        expected = 40 + 20 + (math.log2(3) + 2) + 2 * math.log2(27) + math.log2(math.comb(25, 2))
        assert bits_for_passphrase(record) == pytest.approx(expected)

    def test_empty_wordlist_is_zero(self):
        assert bits_for_passphrase(PassphraseRecord(3, 0)) == 0


class TestBitsForRecord:
    def test_character_record(self):
        assert bits_for_record(CharacterRecord(36, 16)) == pytest.approx(16 * math.log2(36))

    def test_passphrase_record(self):
        assert bits_for_record(PassphraseRecord(3, 200)) == pytest.approx(3 * math.log2(200))

    def test_unknown_record(self):
        with pytest.raises(InvalidArgument):
            bits_for_record(("not", "a", "record"))


class TestEstimate:
    def test_character_estimate_is_exact(self):
        opts = GenerationOptions(mode="character", length=20, upper=False, symbols=False)
        assert estimate_bits(opts) == pytest.approx(20 * math.log2(36))

    def test_character_estimate_empty_pool(self):
        opts = GenerationOptions(mode="character", lower=False, upper=False, digits=False, symbols=False)
        assert estimate_bits(opts) == 0

    def test_words_only(self):
        opts = GenerationOptions(mode="passphrase", num_words=5)
        assert estimate_bits(opts, 200) == pytest.approx(5 * math.log2(200))

    def test_capitalize_assumes_five_letters_per_word(self):
        opts = GenerationOptions(mode="passphrase", num_words=4, capitalize=True)
        assert estimate_bits(opts, 200) == pytest.approx(4 * math.log2(200) + 20)

    def test_leet_assumes_three_eligible_letters_per_word(self):
        opts = GenerationOptions(mode="passphrase", num_words=4, leet=True)
        leet_bits = estimate_bits(opts, 200) - 4 * math.log2(200)
        assert leet_bits == pytest.approx(4 * 3 * math.log2(1.5))
        assert leet_bits == pytest.approx(7.02, abs=0.01)

    @pytest.mark.parametrize("num_words", [2, 5, 8])
    def test_leet_estimate_scales_with_word_count(self, num_words):
        opts = GenerationOptions(mode="passphrase", num_words=num_words, leet=True)
        plain = GenerationOptions(mode="passphrase", num_words=num_words)
        delta = estimate_bits(opts, 1024) - estimate_bits(plain, 1024)
        assert delta == pytest.approx(num_words * 3 * math.log2(1.5))

    def test_insertion_uses_same_shape_as_measurement(self):
        opts = GenerationOptions(mode="passphrase", num_words=4, separator="-", insert_extras=True)
        base_len = 20 + 3
        k = 4  # min(4, ceil(23 / 6))
        choice = len(DIGITS) + len(SYMBOLS)
        expected = 4 * math.log2(200) + k * math.log2(choice) + log2_ncr(base_len + k, k)
        assert estimate_bits(opts, 200) == pytest.approx(expected)
        measured = bits_for_passphrase(
            PassphraseRecord(4, 200, insertion=InsertionRecord(k, choice, base_len))
        )
        assert estimate_bits(opts, 200) == pytest.approx(measured)

    def test_estimate_uses_process_wordlist_by_default(self, monkeypatch):
        import passgen
        monkeypatch.setattr(passgen, "_WORDLIST", tuple(f"w{i}" for i in range(64)))
        opts = GenerationOptions(mode="passphrase", num_words=3)
        assert estimate_bits(opts) == pytest.approx(18)

    def test_unknown_mode(self):
        with pytest.raises(InvalidArgument):
            estimate_bits(GenerationOptions(mode="pin"), 200)
