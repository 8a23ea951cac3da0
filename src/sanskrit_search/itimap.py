"""
Iti-quotation ending correspondences (प्रतीकग्रहण).

When a commentary quotes a word it appends इति, and sandhi fuses the word's
ending with the इ: नारायण + इति -> नारायणेति, हरिः + इति -> हरिरिति. The map
below records those fusions in both directions:

    reverse: quoted suffix  -> possible base endings (ambiguity kept)
    forward: base ending    -> quoted suffix
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Tuple

from .models import Variant
from .normalize import DEVANAGARI_MARKS

log = logging.getLogger(__name__)

# The fused quotation always ends in this cluster
ITI_CORE = "ति"


@dataclass(frozen=True)
class SandhiEndingMap:
    reverse: Mapping[str, Tuple[str, ...]]
    forward: Mapping[str, str]

    @classmethod
    def from_tables(cls, reverse: dict, forward: dict) -> "SandhiEndingMap":
        return cls(
            reverse=MappingProxyType({k: tuple(v) for k, v in reverse.items()}),
            forward=MappingProxyType(dict(forward)),
        )

    def reverse_suffixes(self) -> List[str]:
        return sorted(self.reverse, key=len, reverse=True)

    def forward_endings(self) -> List[str]:
        return sorted(self.forward, key=len, reverse=True)


ITI_SANDHI_MAP = SandhiEndingMap.from_tables(
    reverse={
        # vowel endings
        "ेति": ("", "अ", "आ"),
        "ीति": ("इ", "ई"),
        "ूति": ("उ", "ऊ"),
        "वीति": ("उ", "ऊ"),
        "विति": ("उ", "ऊ"),
        "रिति": ("ऋ", "ॠ"),
        "लिति": ("ऌ", "ॡ"),
        "ैति": ("ए", "ऐ", "े", "ै"),
        "ावीति": ("ओ", "औ"),
        "ाविति": ("ओ", "औ"),
        "ोऽति": ("ओ",),
        # singular case endings
        "येति": ("य", "या", "ाय"),
        "ेणेति": ("ेण",),
        "ादिति": ("ात्",),
        "स्येति": ("स्य",),
        "मिति": ("म्", "ाम्"),
        "यामिति": ("याम्",),
        # dual
        "ौति": ("औ",),
        "ोरिति": ("योः",),
        "भ्यामिति": ("भ्याम्",),
        # plural
        "ानिति": ("ान्",),
        "ैरिति": ("ैः",),
        "भिरिति": ("भिः",),
        "ेभ्यरिति": ("ेभ्यः",),
        "ानामिति": ("ानाम्",),
        "णामिति": ("णाम्",),
        "ष्विति": ("ेषु",),
        "स्विति": ("सु",),
        "यारिति": ("याः",),
        "ाः इति": ("ाः",),       # visarga retained before a separate इति
        "ा इति": ("ाः",),        # visarga dropped
    },
    forward={
        # vowel endings; "" is the inherent a of a bare consonant
        "": "ेति",
        "अ": "ेति",
        "आ": "ेति",
        "इ": "ीति",
        "ई": "ीति",
        "उ": "वीति",
        "ऊ": "वीति",
        "ऋ": "रिति",
        "ॠ": "रिति",
        "ऌ": "लिति",
        "ॡ": "लिति",
        "ए": "ैति",
        "े": "ैति",
        "ऐ": "ैति",
        "ै": "ैति",
        "ओ": "ावीति",
        # singular
        "य": "येति",
        "या": "येति",
        "ाय": "ायेति",
        "ेण": "ेणेति",
        "ात्": "ादिति",
        "स्य": "स्येति",
        "म्": "मिति",
        "ाम्": "मिति",
        "याम्": "यामिति",
        # dual
        "औ": "ौति",
        "योः": "ोरिति",
        "भ्याम्": "भ्यामिति",
        # plural
        "ान्": "ानिति",
        "ैः": "ैरिति",
        "भिः": "भिरिति",
        "ेभ्यः": "ेभ्यरिति",
        "ानाम्": "ानामिति",
        "णाम्": "णामिति",
        "ेषु": "ष्विति",
        "सु": "स्विति",
        "याः": "यारिति",
        "ाः": "ाः इति",
    },
)


def expand_quotation_variants(term: str, ending_map: SandhiEndingMap = ITI_SANDHI_MAP) -> List[Variant]:
    """
    Variants of `term` across the iti-quotation boundary, in both directions.

    1) term read as a quotation: every reverse suffix it ends with is swapped
       for each candidate base ending (all suffixes are tried, so येति and ेति
       can both contribute).
    2) term read as a bare word: every forward ending it carries is swapped for
       its quoted suffix. Skipped when the term already ends in ति.
    """
    if not term or not isinstance(term, str):
        return []

    variants: List[Variant] = []

    for suffix in ending_map.reverse_suffixes():
        if not term.endswith(suffix):
            continue
        base = term[: -len(suffix)]
        for ending in ending_map.reverse[suffix]:
            variants.append(Variant(base + ending, f"{suffix}->{ending or 'stem'}"))

    if not term.endswith(ITI_CORE):
        for ending in ending_map.forward_endings():
            quoted = ending_map.forward[ending]
            if ending == "":
                # inherent a: only when the last character carries no mark
                if term[-1] not in DEVANAGARI_MARKS:
                    variants.append(Variant(term + quoted, f"stem->{quoted}"))
            elif term.endswith(ending):
                variants.append(Variant(term[: -len(ending)] + quoted, f"{ending}->{quoted}"))

    log.debug("Quotation variants for %r: %s", term, [v.text for v in variants])
    return variants
