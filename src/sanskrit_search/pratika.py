"""
Pratika (प्रतीक) identification.

A pratika is a quoted word closed by इति, e.g. ब्रह्मेति = ब्रह्म + इति.
`PratikaIdentifier.classify` decides whether a span is such a quotation and,
if so, reverses the sandhi at the join to recover the quoted stem.

Input must already be Devanagari; callers transliterate before and after.
"""
from __future__ import annotations
import logging
import re
from typing import List, Optional, Tuple

from . import config as CFG
from .models import PratikaAnalysis, SandhiRule
from .normalize import DEVANAGARI_VOWEL_SIGNS, nfc

log = logging.getLogger(__name__)

ITI = "इति"

# Only these shapes can be pratikas:
#   <vowel sign ि ी े> + ति    रामेति, हरिरिति, नदीति
#   <space> + इति               कृपालव इति
#   <word without ि ी े> + इति   रामइति
_FUSED_SHAPE = re.compile(r"[िीे]ति$")
_SPACED_SHAPE = re.compile(r"\s+इति$")
_PLAIN_SHAPE = re.compile(r"^[^िीे]+इति$")

_EXPLICIT_FINAL = re.compile(rf"[{DEVANAGARI_VOWEL_SIGNS}ःंँ]$")

_VOCALIC_R = ("ृ", "ॄ")

# Rough consonant class used by the ोति lookback; kept as-is even though it
# misfires on words whose ो is a genuine vowel after a consonant.
_CONSONANTS = "कखगघङचछजझञटठडढणतथदधनपफबभमयरलवशषसह"


def _after_vocalic_r(preceding: str) -> bool:
    return preceding.endswith(_VOCALIC_R)


def _bhir_keeps_r(preceding: str) -> bool:
    return not preceding or preceding.endswith(_VOCALIC_R)


def _after_consonant(preceding: str) -> bool:
    return bool(preceding) and preceding[-1] in _CONSONANTS


def _rule(suffix: str, restore: str, rule_id: str, description: str, confidence: int,
          guard=None, strip=None) -> SandhiRule:
    return SandhiRule(
        match_suffix=suffix,
        reconstructed_suffix=restore,
        rule_id=rule_id,
        description=description,
        confidence=confidence,
        guard=guard,
        strip=strip,
    )


# /* ~~~ suffix table: longest suffix first, then original priority; first hit wins ~~~ */
# A few rows drop fewer or more codepoints than their suffix holds (strip=);
# those counts are fixed and reproduced as-is.
PRATIKA_RULES: Tuple[SandhiRule, ...] = (
    # 9
    _rule("येभ्यरिति", "येभ्यः", "yebhyariti", "Dative/ablative plural + इति", 95, strip=8),
    # 8
    _rule("ेभ्यरिति", "ेभ्यः", "ebhyariti", "Dative/ablative plural + इति", 95),
    _rule("भ्यामिति", "", "bhyaamiti", "Dual instrumental/dative/ablative + इति", 95, strip=7),
    # 7
    _rule("ानामिति", "", "aanaamiti", "Genitive plural + इति", 95),
    # 6
    _rule("य्विति", "यु", "yaviti", "YU (यु) + इति → य्विति sandhi", 85),
    _rule("स्येति", "स्य", "syeti", "Genitive singular + इति", 90),
    _rule("भिरिति", "भिर", "bhiriti", "Instrumental plural + इति", 90, guard=_bhir_keeps_r),
    _rule("भिरिति", "भिः", "bhiriti-visarga", "Instrumental plural (ः → र sandhi) + इति", 90),
    _rule("णामिति", "", "naamiti", "Genitive plural feminine + इति", 95),
    _rule("यामिति", "", "yaamiti", "Locative feminine singular + इति", 95),
    _rule("यारिति", "याः", "yaariti", "Genitive/ablative feminine + इति", 90, strip=5),
    _rule("ष्विति", "", "shviti", "Locative plural + इति", 85, strip=5),
    _rule("स्विति", "", "sviti", "Locative plural feminine + इति", 85, strip=5),
    # 5
    _rule("ाविति", "ौ", "aaviti", "AU (ौ) + इति → ाविति sandhi", 85),
    _rule("ायेति", "", "aayeti", "Dative singular + इति", 80),
    _rule("ेणेति", "", "eneti", "Instrumental singular + इति", 90, strip=4),
    _rule("ोरिति", "ोः", "oriti", "Dual genitive/locative + इति", 90),
    _rule("ैरिति", "ैः", "airiti", "Instrumental plural + इति", 85),
    _rule("ानिति", "", "aaniti", "Accusative plural + इति", 80),
    _rule("ानीति", "", "aaneeiti", "Accusative plural (ानि) + इति", 80, strip=6),
    # 4
    _rule("मिति", "म्", "miti", "Accusative singular (म्) + इति", 85),
    _rule("दिति", "त्", "diti", "त् + इति → दिति sandhi", 85),
    _rule("रिति", "", "riti-rvowel", "R vowel + इति", 80, guard=_after_vocalic_r),
    _rule("रिति", "ः", "riti-visarga", "Visarga (ः) + इति → रिति sandhi", 88),
    _rule("लिति", "", "liti", "L vowel + इति", 80),
    _rule("विति", "", "viti", "U vowel + इति", 75),
    _rule("येति", "", "yeti", "Instrumental/dative singular + इति", 75),
    # 3
    _rule("ोति", "ः", "oti-visarga", "Visarga (ः) + इति → ोति sandhi", 70, guard=_after_consonant),
    _rule("ोति", "", "oti", "O vowel + इति", 65),
    _rule("ेति", "", "eti", "A vowel or stem + इति", 65),
    _rule("ीति", "", "eeti", "I vowel + इति", 70),
    _rule("ूति", "", "ooti", "U vowel + इति", 70),
    _rule("ैति", "", "aiti", "E/AI vowel + इति", 70),
    _rule("ौति", "", "auti", "AU dual + इति", 70),
)

GENERIC_RULE = _rule(ITI, "", "generic", "Generic stem + इति", 60)
SPACE_RULE_ID = "space-iti-inherent-a"
SPACE_CONFIDENCE = 75


def _reject(text: str, why: str) -> PratikaAnalysis:
    return PratikaAnalysis(original_text=text, is_pratika=False, description=why, confidence=0)


class PratikaIdentifier:
    """Classifies spans against an ordered suffix table (default: PRATIKA_RULES)."""

    def __init__(self, rules: Tuple[SandhiRule, ...] = PRATIKA_RULES,
                 min_stem_length: int = CFG.MIN_STEM_LENGTH) -> None:
        self.rules = tuple(rules)
        self.min_stem_length = min_stem_length

    def match_rule(self, text: str) -> Optional[SandhiRule]:
        """First table rule matching the tail of `text`, or None."""
        for rule in self.rules:
            if rule.matches(text):
                return rule
        return None

    def classify(self, text) -> PratikaAnalysis:
        if not isinstance(text, str) or not text.strip():
            return _reject("", "Input must be a non-empty string")

        trimmed = nfc(text.strip())

        if not (_FUSED_SHAPE.search(trimmed) or _SPACED_SHAPE.search(trimmed)
                or _PLAIN_SHAPE.search(trimmed)):
            return _reject(trimmed, "Only words ending with इति, िति, ीति, or ेति qualify as pratikas")

        if _SPACED_SHAPE.search(trimmed):
            word = _SPACED_SHAPE.sub("", trimmed).strip()
            if _EXPLICIT_FINAL.search(word):
                return _reject(trimmed, "Space-separated इति with explicit vowel/visarga is not a pratika")
            return self._accept(trimmed, word, SPACE_RULE_ID,
                                "Space + इति after consonant (inherent अ sandhi)",
                                " " + ITI, SPACE_CONFIDENCE)

        rule = self.match_rule(trimmed)
        if rule is None:
            rule = GENERIC_RULE
        stem = rule.reconstruct(trimmed)
        log.debug("Pratika rule %s on %r -> %r", rule.rule_id, trimmed, stem)
        return self._accept(trimmed, stem, rule.rule_id, rule.description,
                            rule.match_suffix, rule.confidence)

    def _accept(self, text: str, stem: str, rule_id: str, description: str,
                ending: str, confidence: int) -> PratikaAnalysis:
        stem = nfc(stem)
        if len(stem) < self.min_stem_length:
            return _reject(text, "Stem too short - likely a regular word, not a pratika")
        return PratikaAnalysis(
            original_text=text,
            is_pratika=True,
            stem=stem,
            rule_id=rule_id,
            description=description,
            iti_ending=ending,
            confidence=confidence,
        )

    # ---- convenience ----

    def is_pratika(self, text) -> bool:
        return self.classify(text).is_pratika

    def extract_stem(self, text) -> Optional[str]:
        result = self.classify(text)
        return result.stem if result.is_pratika else None

    def extract_searchable_forms(self, text) -> Optional[List[str]]:
        """
        The stem plus the surface form its ending takes before a vowel, so a
        commentary's pratika can be found in the source verse either way:
        स्यादिति -> स्यात्, स्याद्;  हरिरिति -> हरिः, हरिर्.
        """
        result = self.classify(text)
        if not result.is_pratika:
            return None

        stem = result.stem
        forms = [stem]
        if result.rule_id == "diti" and stem.endswith("त्"):
            forms.append(stem[:-2] + "द्")
        if result.rule_id == "bhiriti-visarga" and stem.endswith("भिः"):
            forms.append(stem[:-1] + "र्")
        elif result.rule_id == "bhiriti" and stem.endswith("भिर"):
            forms.append(stem[:-1] + "ः")
        if result.rule_id == "riti-visarga" and stem.endswith("ः"):
            forms.append(stem[:-1] + "र्")
        return forms

    def generate_pratika_forms(self, stem) -> List[str]:
        """Plausible इति forms of a bare stem (the inverse direction of classify)."""
        if not isinstance(stem, str) or not stem:
            return []
        stem = nfc(stem)
        last = stem[-1]
        forms = [stem + ITI]

        if stem.endswith("म्"):
            forms.append(stem[:-2] + "मिति")
        if last in ("अ", "आ") or not ends_with_vowel(stem):
            forms.append(stem + "ेति")
        if last in ("इ", "ई"):
            forms.append(stem + "ीति")
        if last in ("उ", "ऊ"):
            forms.append(stem + "वीति")
            forms.append(stem + "विति")
        if last in ("ए", "ै"):
            forms.append(stem + "ैति")
        if last in ("ओ", "औ"):
            forms.append(stem + "ावीति")
            forms.append(stem + "ाविति")
        return list(dict.fromkeys(forms))


_VOWELS = frozenset("अआइईउऊऋॠऌॡएऐओऔ" + DEVANAGARI_VOWEL_SIGNS)


def ends_with_vowel(text: str) -> bool:
    return bool(text) and text[-1] in _VOWELS


_default = PratikaIdentifier()


def classify(text) -> PratikaAnalysis:
    return _default.classify(text)


def is_pratika(text) -> bool:
    return _default.is_pratika(text)


def extract_stem(text) -> Optional[str]:
    return _default.extract_stem(text)


def extract_searchable_forms(text) -> Optional[List[str]]:
    return _default.extract_searchable_forms(text)


def generate_pratika_forms(stem) -> List[str]:
    return _default.generate_pratika_forms(stem)


def match_rule(text: str) -> Optional[SandhiRule]:
    return _default.match_rule(text)
