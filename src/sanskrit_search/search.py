from __future__ import annotations
import logging
import time
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from .config import SearchConfig
from .itimap import ITI_SANDHI_MAP, SandhiEndingMap, expand_quotation_variants
from .models import (
    Document,
    DocumentResult,
    MatchContext,
    MatchType,
    SearchMatch,
    SearchResult,
)
from .normalize import (
    DEVANAGARI_MARKS,
    bounded_pattern,
    ends_with_devanagari_mark,
    fold,
    has_ending_marker,
    nfc,
)
from .phonetic import PHONETIC_TABLE, Equivalence, phonetic_variants
from .sandhi import SandhiSplitter

log = logging.getLogger(__name__)

# Masculine/neuter endings (with the common sandhi forms ो and ौ) and
# feminine endings used for pratika-grahana cross references.
_GRAHANA_ENDINGS = (
    "", "ः", "म्", "ं", "स्य", "एन", "ाय", "ात्", "े",
    "ौ", "योः", "ाभ्याम्",
    "ाः", "ान्", "ैः", "भिः", "भ्यः", "ेभ्यः", "ानाम्", "ेषु",
    "ो",
)
_GRAHANA_FEM_ENDINGS = ("ा", "ाम्", "या", "यै", "यां", "याः", "यैः", "ासु")


def _now_ms() -> int:
    return int(time.time() * 1000)


def _valid(term: Any, text: Any) -> bool:
    return isinstance(term, str) and isinstance(text, str) and bool(term) and bool(text)


def _dedup(matches: Iterable[SearchMatch]) -> List[SearchMatch]:
    """Drop later matches with an already-seen (position, length)."""
    seen = set()
    out: List[SearchMatch] = []
    for m in matches:
        if m.key in seen:
            continue
        seen.add(m.key)
        out.append(m)
    return out


def get_nested_value(obj: Any, path: str) -> Any:
    """Dot-path lookup through mappings, sequences (numeric segments) and attributes."""
    current = obj
    for key in path.split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(key)
        elif isinstance(current, Sequence) and not isinstance(current, str):
            if not key.isdigit() or int(key) >= len(current):
                return None
            current = current[int(key)]
        else:
            current = getattr(current, key, None)
    return current


class SanskritSearch:
    """
    Sandhi-aware search over NFC Devanagari text.

      * search(term, text): precision mode for terms ending in a mark
        (exact, boundary-delimited, anusvara/visarga equivalents),
        fuzzy mode otherwise (substring + sandhi variants).
      * search_with_pratika_grahana(term, text): search() plus the term's
        iti-quotation forms in both directions.

    Positions and lengths are codepoint offsets into the NFC form of `text`.
    """

    def __init__(
        self,
        config: Union[SearchConfig, Mapping[str, Any], None] = None,
        *,
        splitter: Optional[SandhiSplitter] = None,
        ending_map: SandhiEndingMap = ITI_SANDHI_MAP,
        phonetic_table: Sequence[Equivalence] = PHONETIC_TABLE,
    ) -> None:
        if config is None or isinstance(config, Mapping):
            config = SearchConfig.from_mapping(config)
        self.config = config
        self.splitter = splitter if splitter is not None else SandhiSplitter()
        self.ending_map = ending_map
        self.phonetic_table = tuple(phonetic_table)

    # ------------- public searches -------------

    def search(self, term, text) -> SearchResult:
        if not _valid(term, text):
            return SearchResult(matches=[], count=0)
        term, text = nfc(term), nfc(text)
        return self._finish(term, self._collect(term, text))

    def exact_word_search(self, term, text) -> SearchResult:
        if not _valid(term, text):
            return SearchResult(matches=[], count=0)
        term, text = nfc(term), nfc(text)
        return self._finish(term, self._exact_matches(term, text))

    def search_with_pratika_grahana(self, term, text) -> SearchResult:
        if not _valid(term, text):
            return SearchResult(matches=[], count=0)
        term, text = nfc(term), nfc(text)
        matches = self._collect(term, text)
        matches += self.pratika_grahana_search(term, text)
        return self._finish(term, matches)

    # ------------- strategies (inputs already NFC) -------------

    def direct_search(self, term: str, text: str) -> List[SearchMatch]:
        """
        Substring hits. A hit is stretched over the marks that follow it unless
        `term` already ends in one, so राम also highlights रामः and रामो while
        रामं stays exactly रामं.
        """
        if not term or not text:
            return []
        needle = term if self.config.case_sensitive else fold(term)
        haystack = text if self.config.case_sensitive else fold(text)
        extend = not ends_with_devanagari_mark(term)

        matches: List[SearchMatch] = []
        pos = haystack.find(needle)
        while pos != -1:
            length = len(term)
            if extend:
                nxt = pos + length
                while nxt < len(text) and text[nxt] in DEVANAGARI_MARKS:
                    length += 1
                    nxt += 1
            matches.append(self._match(text, pos, length, MatchType.DIRECT))
            pos = haystack.find(needle, pos + len(term))
        return matches

    def sandhi_aware_search(self, term: str, text: str) -> List[SearchMatch]:
        matches: List[SearchMatch] = []
        for variant in self.splitter.split_variants(term):
            for m in self.direct_search(variant.text, text):
                matches.append(replace(m, type=MatchType.SANDHI,
                                       source_rule_id=variant.rule_id, original_term=term))
        return matches

    def pratika_grahana_search(self, term: str, text: str) -> List[SearchMatch]:
        variants = expand_quotation_variants(term, self.ending_map)
        log.debug("Pratika grahana variations for %r: %s", term, [v.text for v in variants])
        matches: List[SearchMatch] = []
        for variant in variants:
            hits = self.direct_search(variant.text, text)
            log.debug("Variant %r (%s): %d matches", variant.text, variant.rule_id, len(hits))
            for m in hits:
                matches.append(replace(m, type=MatchType.PRATIKA_GRAHANA,
                                       source_rule_id=variant.rule_id, original_term=term))
        log.debug("Total pratika grahana matches: %d", len(matches))
        return matches

    # ------------- corpus-level helpers -------------

    def search_multiple(self, term, documents: Iterable[Union[Document, Mapping[str, Any]]],
                        *, pratika: bool = False) -> List[DocumentResult]:
        """Per-document results in document order; documents without hits are dropped."""
        run = self.search_with_pratika_grahana if pratika else self.search
        out: List[DocumentResult] = []
        for doc in documents:
            doc = Document.coerce(doc)
            result = run(term, doc.text)
            if result.count > 0:
                out.append(DocumentResult(id=doc.id, metadata=dict(doc.metadata), result=result))
        return out

    def search_structured(self, term, data: Any, fields: Iterable[str]) -> Dict[str, SearchResult]:
        """Search each dot-path field of a nested record; only fields with hits are returned."""
        results: Dict[str, SearchResult] = {}
        for path in fields:
            value = get_nested_value(data, path)
            if not isinstance(value, str) or not value:
                continue
            found = self.search(term, value)
            if found.count > 0:
                results[path] = found
        return results

    def generate_grahana_case_forms(self, stem) -> List[str]:
        """The stem with every listed case ending, plus म् <-> ं alternates."""
        if not isinstance(stem, str) or not stem:
            return []
        stem = nfc(stem)
        forms = [stem]
        for ending in _GRAHANA_ENDINGS + _GRAHANA_FEM_ENDINGS:
            form = nfc(stem + ending)
            forms.append(form)
            if "म्" in form:
                forms.append(nfc(form.replace("म्", "ं")))
            if "ं" in form:
                forms.append(nfc(form.replace("ं", "म्")))
        return list(dict.fromkeys(forms))

    # ------------- internals -------------

    def _collect(self, term: str, text: str) -> List[SearchMatch]:
        if has_ending_marker(term):
            log.debug("Precision mode: %r has ending marker -> exact match only", term)
            return self._exact_matches(term, text)

        log.debug("Fuzzy mode: %r has no ending -> sandhi-aware matching", term)
        matches = self.direct_search(term, text)
        if self.config.enable_sandhi and self.splitter is not None:
            matches += self.sandhi_aware_search(term, text)
        return matches

    def _exact_matches(self, term: str, text: str) -> List[SearchMatch]:
        variants = phonetic_variants(term, self.phonetic_table)
        log.debug("Exact word search variants: %s", variants)

        matches: List[SearchMatch] = []
        for variant in variants:
            for hit in bounded_pattern(variant).finditer(text):
                matches.append(self._exact(text, hit.start(), variant, term))

        # no delimited hit for any variant: accept raw occurrences
        if not matches:
            for variant in variants:
                idx = text.find(variant)
                while idx != -1:
                    matches.append(self._exact(text, idx, variant, term))
                    idx = text.find(variant, idx + len(variant))

        log.debug("Exact word search results: %d matches", len(matches))
        return matches

    def _exact(self, text: str, pos: int, variant: str, term: str) -> SearchMatch:
        return self._match(text, pos, len(variant), MatchType.EXACT,
                           variant=variant if variant != term else None)

    def _match(self, text: str, pos: int, length: int, kind: MatchType, **extra) -> SearchMatch:
        return SearchMatch(
            position=pos,
            length=length,
            matched_text=text[pos:pos + length],
            context=self.get_context(text, pos, length),
            type=kind,
            **extra,
        )

    def get_context(self, text: str, position: int, length: int) -> MatchContext:
        span = max(0, int(self.config.context_length))
        start = max(0, position - span)
        end = min(len(text), position + length + span)
        return MatchContext(
            before=text[start:position],
            match=text[position:position + length],
            after=text[position + length:end],
            full=text[start:end],
        )

    def _finish(self, term: str, matches: List[SearchMatch]) -> SearchResult:
        unique = _dedup(matches)
        unique.sort(key=lambda m: m.position)
        if self.config.max_results:
            unique = unique[: self.config.max_results]
        return SearchResult(matches=unique, count=len(unique), search_term=term, timestamp=_now_ms())
