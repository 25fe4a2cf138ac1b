# Copyright (c) 2026 Signer — MIT License

import itertools

import pytest

import passgen


class ReplaySource:
    """Raw 32-bit source that plays back a fixed sequence of values."""

    def __init__(self, values, repeat=False):
        self._values = itertools.cycle(values) if repeat else iter(values)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return next(self._values)


@pytest.fixture
def replay():
    """Build a SecureSampler over a replayed draw sequence.

    replay([5, 7])            -> draws 5 then 7, then StopIteration
    replay([1], repeat=True)  -> draws 1 forever
    """
    def make(values, repeat=False):
        source = ReplaySource(values, repeat=repeat)
        sampler = passgen.SecureSampler(source)
        sampler.source = source
        return sampler
    return make


@pytest.fixture
def small_wordlist():
    return ("ant", "bat", "cow", "dog", "eel", "fox", "gnu", "hen", "owl", "yak")
