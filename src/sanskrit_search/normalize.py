from __future__ import annotations
import re
import unicodedata
from typing import List

# Devanagari marks that can close a surface form: anusvara, visarga, candrabindu,
# dependent vowel signs, virama, and the two Vedic jihvamuliya/upadhmaniya signs.
DEVANAGARI_MARKS = "ंःँािीुूेैोौृॄॢॣ्ᳵᳶ"

# Dependent vowel signs only (no anusvara/visarga/virama).
DEVANAGARI_VOWEL_SIGNS = "ािीुूृॄॢॣेैोौ"

# /* ~~~ ending markers per script; a term ending in one of these is searched exactly ~~~ */
_SCRIPT_ENDING_MARKS = (
    DEVANAGARI_MARKS,
    "ಂಃಾಿೀುೂೃೄೆೇೈೊೋೌ್",   # Kannada
    "ஂஃாிீுூெேைொோௌ்",      # Tamil
    "ంఃాిీుూృౄెేైొోౌ్",   # Telugu
    "ംഃാിീുൂൃെേൈൊോൌ്",     # Malayalam
    "ংঃািীুূৃেৈোৌ্",       # Bengali
    "ંઃાિીુૂૃેૈોૌ્",       # Gujarati
    "ଂଃାିୀୁୂୃେୈୋୌ୍",       # Odia
)
ENDING_MARKS = frozenset("".join(_SCRIPT_ENDING_MARKS))

# Characters that delimit a word for exact-form matching.
WORD_BOUNDARY_CHARS = " \t\n\r\f\v।॥೧೨,;'\"()[]{}/<>|"

_BOUNDARY_CLASS = "".join(re.escape(ch) for ch in WORD_BOUNDARY_CHARS)
_WS = re.compile(r"\s")


def nfc(text: str) -> str:
    return unicodedata.normalize("NFC", text)


def has_ending_marker(term: str) -> bool:
    """True if the last character is an explicit phonological mark in any supported script."""
    return bool(term) and term[-1] in ENDING_MARKS


def ends_with_devanagari_mark(term: str) -> bool:
    return bool(term) and term[-1] in DEVANAGARI_MARKS


def is_boundary_char(ch: str) -> bool:
    return ch in WORD_BOUNDARY_CHARS or bool(_WS.match(ch))


def bounded_pattern(literal: str) -> re.Pattern:
    """
    Regex for `literal` delimited on both sides by a boundary char or the text edge.
    Lookarounds keep adjacent occurrences ("X X") both matchable.
    """
    return re.compile(
        rf"(?<![^\s{_BOUNDARY_CLASS}]){re.escape(literal)}(?![^\s{_BOUNDARY_CLASS}])"
    )


def fold(text: str) -> str:
    """
    Lowercase without changing the codepoint count, so offsets computed on the
    folded string stay valid for the original.
    """
    out: List[str] = []
    for ch in text:
        low = ch.lower()
        out.append(low if len(low) == 1 else ch)
    return "".join(out)
