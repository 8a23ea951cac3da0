# src/e2e/test_search_engine.py

import pytest

from sanskrit_search.config import SearchConfig
from sanskrit_search.models import MatchType
from sanskrit_search.search import SanskritSearch, get_nested_value


@pytest.fixture
def engine():
    return SanskritSearch()


def _keys(result):
    return [(m.position, m.length) for m in result.matches]


# ---- fuzzy mode ----

def test_direct_match_extends_over_following_marks(engine):
    r = engine.search("देव", "देवोऽसुरेभ्यो बलमददात्")
    first = r.matches[0]
    assert (first.position, first.length) == (0, 4)
    assert first.matched_text == "देवो"
    assert first.type is MatchType.DIRECT


def test_term_ending_in_mark_is_not_extended(engine):
    hits = engine.direct_search("रामो", "रामोः")
    assert [(m.position, m.length) for m in hits] == [(0, 4)]


def test_sandhi_variant_found_and_tagged(engine):
    r = engine.search("नमस्त", "नमःते")
    assert any(m.type is MatchType.SANDHI and m.source_rule_id == "reverse-ḥ+t=st"
               and m.original_term == "नमस्त" and m.matched_text == "नमःते" for m in r.matches)


def test_sandhi_can_be_disabled():
    plain = SanskritSearch({"enableSandhi": False})
    assert plain.search("नमस्त", "नमःते").count == 0


def test_case_folding():
    assert SanskritSearch().search("DEV", "deva dev").count == 2
    assert SanskritSearch({"caseSensitive": True}).search("DEV", "deva dev").count == 0


# ---- precision mode ----

def test_anusvara_query_does_not_match_o_ending(engine):
    r = engine.search("नारायणं", "नारायणो नारायणं")
    assert _keys(r) == [(8, 7)]
    assert r.matches[0].type is MatchType.EXACT
    assert r.matches[0].variant is None


def test_precision_mode_rejects_other_endings(engine):
    assert engine.search("नारायणं", "नारायणो").count == 0


def test_phonetic_variant_matches_and_is_reported(engine):
    r = engine.search("रामं", "रामम् वनं गच्छति")
    assert _keys(r) == [(0, 5)]
    assert r.matches[0].variant == "रामम्"


def test_raw_occurrence_used_only_without_delimited_hit(engine):
    r = engine.search("रामं", "श्रीरामं")
    assert _keys(r) == [(4, 4)]
    r = engine.search("रामं", "श्रीरामं । रामं")
    assert _keys(r) == [(11, 4)]


def test_adjacent_delimited_occurrences(engine):
    r = engine.search("रामः", "रामः रामः।रामः")
    assert _keys(r) == [(0, 4), (5, 4), (10, 4)]


# ---- results ----

@pytest.mark.parametrize("term, text", [("", "राम"), ("राम", ""), (None, "राम"), ("राम", 5)])
def test_invalid_input_gives_empty_result(engine, term, text):
    r = engine.search(term, text)
    assert r.matches == [] and r.count == 0


def test_results_unique_and_ordered(engine):
    text = "देवो देवाः देवम् देवेन देवैः देवानाम् देव"
    r = engine.search("देव", text)
    keys = _keys(r)
    assert len(keys) == len(set(keys))
    positions = [p for p, _ in keys]
    assert positions == sorted(positions)
    assert r.count == len(r.matches) == 7


def test_search_is_pure(engine):
    text = "हरिः ॐ तत् सत्"
    assert engine.search("हरि", text).matches == engine.search("हरि", text).matches


def test_nfc_applied_before_offsets(engine):
    r = engine.search("caf\u00e9", "cafe\u0301 noir")
    assert _keys(r) == [(0, 4)]
    assert r.matches[0].matched_text == "caf\u00e9"


def test_max_results_cap():
    text = "क क क क"
    assert SanskritSearch({"maxResults": 2}).search("क", text).count == 2
    assert SanskritSearch({"max_results": 0}).search("क", text).count == 4


def test_context_window_stays_in_bounds():
    s = SanskritSearch(SearchConfig(context_length=3))
    m = s.search("d", "abcdefgh").matches[0]
    assert (m.context.before, m.context.match, m.context.after) == ("abc", "d", "efg")
    assert m.context.full == "abcdefg"
    m = s.search("a", "abcdefgh").matches[0]
    assert m.context.before == "" and m.context.after == "bcd"


def test_result_to_dict_contract(engine):
    d = engine.search("नारायणं", "नारायणं").to_dict()
    assert set(d) == {"matches", "count", "searchTerm", "timestamp"}
    assert d["searchTerm"] == "नारायणं"
    assert d["matches"][0]["type"] == "exact"
    assert {"position", "length", "matchedText", "context", "type"} <= set(d["matches"][0])


# ---- pratika grahana ----

def test_pratika_grahana_finds_quoted_form(engine):
    text = "नारायणेति ब्रूयात्"
    r = engine.search_with_pratika_grahana("नारायण", text)
    quoted = [m for m in r.matches if m.type is MatchType.PRATIKA_GRAHANA]
    assert len(quoted) == 1
    assert (quoted[0].position, quoted[0].length) == (0, 9)
    assert quoted[0].source_rule_id == "stem->ेति"
    assert quoted[0].original_term == "नारायण"
    assert all(m.type is not MatchType.PRATIKA_GRAHANA for m in engine.search("नारायण", text).matches)


def test_pratika_grahana_finds_base_of_quoted_term(engine):
    r = engine.search_with_pratika_grahana("रामस्येति", "रामस्य पत्नी")
    assert any(m.type is MatchType.PRATIKA_GRAHANA and m.matched_text == "रामस्य" for m in r.matches)


def test_grahana_case_forms():
    forms = SanskritSearch().generate_grahana_case_forms("राम")
    assert forms[0] == "राम"
    assert {"रामस्य", "रामम्", "रामं", "रामाः"} <= set(forms)
    assert len(forms) == len(set(forms))
    assert SanskritSearch().generate_grahana_case_forms("") == []


# ---- corpus helpers ----

def test_search_multiple_keeps_document_order(engine):
    docs = [
        {"id": "a", "text": "रामः वनं गच्छति", "metadata": {"n": 1}},
        {"id": "b", "text": "कृष्णः"},
        {"id": "c", "text": "रामो"},
    ]
    out = engine.search_multiple("राम", docs)
    assert [d.id for d in out] == ["a", "c"]
    assert out[0].metadata == {"n": 1}
    assert out[0].count == 1


def test_search_structured_follows_dot_paths(engine):
    data = {"title": "रामायणम्", "meta": {"tags": ["राम", "x"]}, "n": 5}
    out = engine.search_structured("राम", data, ["title", "meta.tags.0", "n", "missing.x"])
    assert set(out) == {"title", "meta.tags.0"}


def test_get_nested_value():
    data = {"a": [{"b": "x"}]}
    assert get_nested_value(data, "a.0.b") == "x"
    assert get_nested_value(data, "a.1.b") is None
    assert get_nested_value(data, "a.z") is None
    assert get_nested_value(None, "a") is None
