from __future__ import annotations

import pytest

from pwgen.charsets import (
    DEFAULT_CHARS,
    DIGIT,
    LOWER,
    SPECIAL,
    UPPER,
    CharacterClass,
    build_alphabet,
    count_in_class,
    parse_selector,
)


def test_reference_sets():
    assert len(UPPER) == 26
    assert len(LOWER) == 26
    assert len(DIGIT) == 10
    assert len(SPECIAL) == 33
    assert len(set(SPECIAL)) == 33
    assert ' ' in SPECIAL
    assert '\\' in SPECIAL
    assert '"' in SPECIAL


def test_default_chars_order():
    assert DEFAULT_CHARS == UPPER + LOWER + DIGIT + SPECIAL
    assert len(DEFAULT_CHARS) == 95


@pytest.mark.parametrize(
    ('selector', 'expected'),
    [
        ('AaDS', UPPER + LOWER + DIGIT + SPECIAL),
        ('AD', UPPER + DIGIT),
        ('SA', UPPER + SPECIAL),
        ('DD', DIGIT),
        ('a', LOWER),
        ('  S  ', SPECIAL),
        ('xAyz', UPPER),
    ],
)
def test_build_alphabet(selector, expected):
    assert build_alphabet(selector) == expected


@pytest.mark.parametrize('selector', ['', 'xyz', 'd', 's', '   '])
def test_build_alphabet_falls_back_to_all_classes(selector):
    assert build_alphabet(selector) == DEFAULT_CHARS


def test_parse_selector_is_case_sensitive():
    assert parse_selector('aD') == (CharacterClass.LOWER, CharacterClass.DIGIT)
    assert parse_selector('AAAA') == (CharacterClass.UPPER,)
    assert parse_selector('q') == ()


def test_class_membership():
    assert 'Q' in CharacterClass.UPPER
    assert 'q' not in CharacterClass.UPPER
    assert ' ' in CharacterClass.SPECIAL
    assert 'AB' not in CharacterClass.UPPER


def test_count_in_class():
    text = 'Ab1! zZ9'
    assert count_in_class(text, CharacterClass.UPPER) == 2
    assert count_in_class(text, CharacterClass.LOWER) == 2
    assert count_in_class(text, CharacterClass.DIGIT) == 2
    assert count_in_class(text, CharacterClass.SPECIAL) == 2
