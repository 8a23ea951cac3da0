from __future__ import annotations
import logging
import os
import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Sequence, Set, Tuple, Union

from ..models import Document
from ..normalize import fold

log = logging.getLogger(__name__)

# Whitespace, Latin punctuation and the danda / double danda verse marks
_SPLIT_RE = re.compile(r"[\s.,;!?()\[\]{}।॥]+")

VERBOSE_ENV = "SANSKRIT_SEARCH_VERBOSE"


def extract_words(text: str) -> List[str]:
    """Distinct tokens of `text` in first-seen order."""
    if not text:
        return []
    return list(dict.fromkeys(w for w in _SPLIT_RE.split(text) if w))


@dataclass(frozen=True)
class IndexedDocument:
    id: str
    metadata: Mapping[str, Any]


@dataclass(frozen=True)
class DocumentIndex:
    """
    Inverted index word -> document ordinals.
    Only narrows the set of documents handed to the search engine; a document
    missing from the candidates is never taken as proof of "no match".
    """
    documents: Tuple[IndexedDocument, ...]
    terms: Mapping[str, FrozenSet[int]]

    def __len__(self) -> int:
        return len(self.documents)

    def lexicon(self) -> List[str]:
        return sorted(self.terms)

    def candidate_ids(self, words: Iterable[str], case_sensitive: bool = True) -> Set[int]:
        """
        Ordinals of documents holding a token equal to, or containing, any of
        `words`. Containment is a lexicon scan, like the short-query path of a
        k-gram index, so a fused token such as देवोऽसुरेभ्यो still surfaces देव.
        With case_sensitive=False both sides are case-folded before comparing.
        """
        hits: Set[int] = set()
        wanted = [w for w in words if w]
        if not wanted:
            return hits
        if not case_sensitive:
            wanted = [fold(w) for w in wanted]
        for w in wanted:
            hits.update(self.terms.get(w, ()))
        for token, ids in self.terms.items():
            key = token if case_sensitive else fold(token)
            if any(w in key for w in wanted):
                hits.update(ids)
        return hits


def build_index(documents: Iterable[Union[Document, Mapping[str, Any]]]) -> DocumentIndex:
    buckets: Dict[str, Set[int]] = defaultdict(set)
    entries: List[IndexedDocument] = []
    for ordinal, raw in enumerate(documents):
        doc = Document.coerce(raw)
        entries.append(IndexedDocument(id=doc.id, metadata=dict(doc.metadata)))
        for word in extract_words(doc.text):
            buckets[word].add(ordinal)
    if os.environ.get(VERBOSE_ENV) == "1":
        log.info("[indexing done] documents=%d terms=%d", len(entries), len(buckets))
    return DocumentIndex(
        documents=tuple(entries),
        terms={w: frozenset(ids) for w, ids in buckets.items()},
    )


def query_index(term: str, index: DocumentIndex, documents: Sequence[Any],
                variants: Iterable[str] = (), case_sensitive: bool = True) -> List[Any]:
    """
    Documents worth searching for `term`, in their original order.

    `variants` are extra surface forms (sandhi, phonetic, quotation) whose
    tokens also count. Falls back to every document when nothing in the
    lexicon qualifies, so index gaps never hide a raw substring match.
    """
    if not isinstance(term, str) or not term:
        return []
    words = extract_words(term)
    for v in variants:
        words.extend(extract_words(v))
    hits = index.candidate_ids(dict.fromkeys(words), case_sensitive=case_sensitive)
    if not hits:
        log.debug("No index candidates for %r; searching all %d documents", term, len(documents))
        return list(documents)
    return [documents[i] for i in sorted(hits) if i < len(documents)]
