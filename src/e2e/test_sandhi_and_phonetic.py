# src/e2e/test_sandhi_and_phonetic.py

import pytest

from sanskrit_search.models import Variant
from sanskrit_search.phonetic import Equivalence, phonetic_variants
from sanskrit_search.sandhi import (
    SandhiSplitter,
    ending_forms,
    needs_sandhi_processing,
    split_variants,
)


# ---- sandhi splitter ----

def test_original_comes_first():
    out = split_variants("रामः")
    assert out[0] == Variant("रामः", "original")


def test_visarga_ending_variations():
    out = split_variants("रामः")
    assert Variant("राम", "nom-sg-visarga") in out
    assert Variant("रामह्", "nom-sg-visarga") in out


def test_anusvara_ending_variations():
    out = split_variants("रामम्")
    assert Variant("राम", "acc-sg-anusvara") in out
    assert Variant("रामन्", "acc-sg-anusvara") in out


def test_reverse_consonant_fusion():
    texts = {v.text: v.rule_id for v in split_variants("तच्च")}
    assert texts["तत्च"] == "reverse-t+c=cc"
    assert texts["तद्च"] == "reverse-d+c=cc"


def test_reverse_visarga_fusion():
    texts = {v.text: v.rule_id for v in split_variants("नमस्ते")}
    assert texts["नमःते"] == "reverse-ḥ+t=st"


def test_visarga_before_vowel_yields_one_variant_per_vowel():
    out = [v for v in split_variants("पुनर्अपि") if v.rule_id == "reverse-ḥ+vowel=r"]
    assert [v.text for v in out] == [
        "पुनःअअपि", "पुनःइअपि", "पुनःउअपि", "पुनःऋअपि", "पुनःएअपि", "पुनःओअपि",
    ]


def test_variants_are_unique_by_text():
    out = split_variants("देवोऽसुरेभ्यः")
    texts = [v.text for v in out]
    assert len(texts) == len(set(texts))


@pytest.mark.parametrize("bad", ["", None, 3])
def test_invalid_term_has_no_variants(bad):
    assert split_variants(bad) == []


def test_splitter_accepts_custom_tables():
    bare = SandhiSplitter(vowel=(), consonant=(), visarga=(), endings=())
    assert bare.split_variants("रामः") == [Variant("रामः", "original")]


def test_needs_sandhi_processing():
    assert needs_sandhi_processing("रामः")
    assert needs_sandhi_processing("सत्")
    assert not needs_sandhi_processing("राम")


def test_ending_forms():
    forms = ending_forms("राम")
    assert forms[0] == "राम"
    assert {"रामः", "रामम्", "रामं"} <= set(forms)
    assert len(forms) == len(set(forms))


# ---- phonetic equivalence ----

@pytest.mark.parametrize(
    "term, expected",
    [
        ("नारायणं", ["नारायणं", "नारायणम्"]),
        ("रामम्", ["रामम्", "रामं"]),
        ("रामः", ["रामः", "रामस्"]),
        ("रामस्", ["रामस्", "रामः"]),
        ("नमस्ते", ["नमस्ते"]),
        ("ರಾಮಂ", ["ರಾಮಂ", "ರಾಮಮ್"]),
        ("రామం", ["రామం", "రామమ్"]),
    ],
)
def test_phonetic_variants(term, expected):
    assert phonetic_variants(term) == expected


def test_phonetic_variants_empty():
    assert phonetic_variants("") == []


def test_phonetic_variants_custom_table():
    table = (Equivalence("latin", "ph", "f"),)
    assert phonetic_variants("phala", table) == ["phala", "fala"]
