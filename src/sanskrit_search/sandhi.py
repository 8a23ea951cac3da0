"""
Sandhi splitter: alternative surface forms of a search term.

Sandhi fuses sounds at word joins (अ + इ -> ए, त् + च -> च्च, ः + त -> स्त).
A term found in a text may therefore appear in a fused or an unfused shape;
`SandhiSplitter.split_variants` undoes the fusions it can recognise and
swaps common endings, and the search engine looks for every result.
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import List, Tuple

from .models import Variant

log = logging.getLogger(__name__)

# Vowels that trigger visarga sandhi when they open the next word
_SANDHI_VOWELS: Tuple[str, ...] = ("अ", "इ", "उ", "ऋ", "ए", "ओ")


@dataclass(frozen=True)
class Fusion:
    """`pattern` + one of `following` fuse into `result`."""
    pattern: str
    following: Tuple[str, ...]
    result: str
    rule: str


@dataclass(frozen=True)
class EndingVariation:
    pattern: re.Pattern
    replacements: Tuple[str, ...]
    rule: str


def _f(pattern: str, following, result: str, rule: str) -> Fusion:
    if isinstance(following, str):
        following = (following,)
    return Fusion(pattern, tuple(following), result, rule)


# स्वरसन्धि
VOWEL_SANDHI: Tuple[Fusion, ...] = (
    _f("अ", "अ", "आ", "a+a=ā"),
    _f("अ", "इ", "ए", "a+i=e"),
    _f("अ", "उ", "ओ", "a+u=o"),
    _f("अ", "ऋ", "अर्", "a+ṛ=ar"),
    _f("आ", "इ", "ऐ", "ā+i=ai"),
    _f("आ", "उ", "औ", "ā+u=au"),
    _f("इ", "अ", "य", "i+a=ya"),
    _f("उ", "अ", "व", "u+a=va"),
    _f("ऋ", "अ", "र", "ṛ+a=ra"),
    _f("ए", "अ", "ए", "e+a=e"),
    _f("ओ", "अ", "ओ", "o+a=o"),
)

# व्यञ्जनसन्धि
CONSONANT_SANDHI: Tuple[Fusion, ...] = (
    _f("त्", "च", "च्च", "t+c=cc"),
    _f("त्", "ज", "ज्ज", "t+j=jj"),
    _f("त्", "श", "च्छ", "t+ś=cch"),
    _f("द्", "च", "च्च", "d+c=cc"),
    _f("न्", "च", "ञ्च", "n+c=ñc"),
    _f("न्", "ज", "ञ्ज", "n+j=ñj"),
    _f("म्", "प", "म्प", "m+p=mp"),
    _f("म्", "ब", "म्ब", "m+b=mb"),
)

# विसर्गसन्धि
VISARGA_SANDHI: Tuple[Fusion, ...] = (
    _f("ः", "क", "ष्क", "ḥ+k=ṣk"),
    _f("ः", "प", "ष्प", "ḥ+p=ṣp"),
    _f("ः", "त", "स्त", "ḥ+t=st"),
    _f("ः", "च", "श्च", "ḥ+c=śc"),
    _f("ः", "अ", "ओ", "aḥ+a=o"),
    _f("ः", _SANDHI_VOWELS, "र्", "ḥ+vowel=r"),
    # elision leaves nothing to locate, so this row never reverses
    _f("ः", _SANDHI_VOWELS, "", "ḥ+vowel=drop"),
)

ENDING_VARIATIONS: Tuple[EndingVariation, ...] = (
    EndingVariation(re.compile(r"ः$"), ("", "ह्"), "nom-sg-visarga"),
    EndingVariation(re.compile(r"म्$"), ("", "न्"), "acc-sg-anusvara"),
    EndingVariation(re.compile(r"अ$"), ("ो", "ं"), "ending-a"),
)

# Case endings tried by ending_forms()
COMMON_ENDINGS: Tuple[str, ...] = ("", "ः", "म्", "ा", "ि", "ी", "े", "ो", "ौ", "ै", "ं", "न्")

_SANDHI_INDICATORS: Tuple[str, ...] = ("्", "ं", "ः", "आ", "ए", "ओ", "ौ", "ै")


def _unfuse(term: str, fusions: Tuple[Fusion, ...], prefix: str) -> List[Variant]:
    out: List[Variant] = []
    for fusion in fusions:
        if not fusion.result:
            continue
        idx = term.find(fusion.result)
        if idx == -1:
            continue
        before = term[:idx]
        after = term[idx + len(fusion.result):]
        for following in fusion.following:
            out.append(Variant(before + fusion.pattern + following + after, f"{prefix}-{fusion.rule}"))
    return out


class SandhiSplitter:
    def __init__(
        self,
        vowel: Tuple[Fusion, ...] = VOWEL_SANDHI,
        consonant: Tuple[Fusion, ...] = CONSONANT_SANDHI,
        visarga: Tuple[Fusion, ...] = VISARGA_SANDHI,
        endings: Tuple[EndingVariation, ...] = ENDING_VARIATIONS,
    ) -> None:
        self.vowel = vowel
        self.consonant = consonant
        self.visarga = visarga
        self.endings = endings

    def split_variants(self, term) -> List[Variant]:
        """`term` itself first, then every distinct alternative form."""
        if not isinstance(term, str) or not term:
            return []

        candidates = [Variant(term, "original")]
        candidates += self.try_split(term)
        candidates += self.try_endings(term)
        candidates += self.try_expand(term)

        seen = set()
        unique: List[Variant] = []
        for v in candidates:
            if v.text in seen:
                continue
            seen.add(v.text)
            unique.append(v)
        log.debug("Sandhi variants for %r: %s", term, [v.text for v in unique])
        return unique

    def try_split(self, term: str) -> List[Variant]:
        return _unfuse(term, self.vowel + self.consonant + self.visarga, "reverse")

    def try_endings(self, term: str) -> List[Variant]:
        out: List[Variant] = []
        for ending in self.endings:
            if not ending.pattern.search(term):
                continue
            for replacement in ending.replacements:
                changed = ending.pattern.sub(replacement, term, count=1)
                if changed != term:
                    out.append(Variant(changed, ending.rule))
        return out

    def try_expand(self, term: str) -> List[Variant]:
        return _unfuse(term, self.vowel, "expand")

    def needs_sandhi_processing(self, term: str) -> bool:
        return any(ind in term for ind in _SANDHI_INDICATORS)

    def ending_forms(self, stem: str) -> List[str]:
        """The stem with each common case ending appended (stem first)."""
        return list(dict.fromkeys(stem + e for e in COMMON_ENDINGS))


_default = SandhiSplitter()


def split_variants(term) -> List[Variant]:
    return _default.split_variants(term)


def needs_sandhi_processing(term: str) -> bool:
    return _default.needs_sandhi_processing(term)


def ending_forms(stem: str) -> List[str]:
    return _default.ending_forms(stem)
