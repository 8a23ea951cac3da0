# sanskrit_search/engine.py
from __future__ import annotations

import os
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from . import config as CFG
from .config import SearchConfig
from .models import Document, DocumentResult, PratikaAnalysis
from .loader import load_documents, VERBOSE_ENV
from .normalize import nfc
from .phonetic import phonetic_variants
from .itimap import expand_quotation_variants
from .pratika import PratikaIdentifier
from .search import SanskritSearch
from .DB.index import DocumentIndex, build_index, query_index
from .DB.storage import IndexSnapshot, save_index, load_index

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the document loader (loader.load_documents),
      - the inverted word index (DB.index),
      - the sandhi-aware matcher (search.SanskritSearch),
      - the pratika classifier (pratika.PratikaIdentifier).

    Public API (used by CLI/Flask):
      * build(roots | documents, ...): ingest -> index -> (optional) persist
      * load(cache=...):               restore index and documents from a snapshot
      * search(term, pratika=False):   per-document results, index-pruned
      * classify(text):                pratika analysis of one span
      * shutdown():                    drop the loaded state
    """

    # ------------- lifecycle -------------

    def __init__(self, config: Union[SearchConfig, Mapping[str, Any], None] = None) -> None:
        self.searcher = SanskritSearch(config)
        self.identifier = PratikaIdentifier()
        self.index: Optional[DocumentIndex] = None
        self._documents: List[Document] = []
        self._by_id: Dict[str, Document] = {}

    @property
    def ready(self) -> bool:
        return self.index is not None

    @property
    def documents(self) -> List[Document]:
        return list(self._documents)

    def document(self, doc_id: str) -> Optional[Document]:
        return self._by_id.get(doc_id)

    def document_count(self) -> int:
        return len(self._documents)

    def _commit(self, docs: List[Document], idx: DocumentIndex) -> None:
        self._documents = docs
        self._by_id = {d.id: d for d in docs}
        self.index = idx

    # /* ~~~ Build an index from source folders or ready-made documents ~~~ */
    def build(
        self,
        roots: Optional[Iterable[str]] = None,
        *,
        documents: Optional[Iterable[Union[Document, Mapping[str, Any]]]] = None,
        cache: Optional[str] = None,           # path to pickle snapshot of index + documents
        unit: Optional[str] = None,            # "line" | "paragraph" | "file"
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ[VERBOSE_ENV] = "1"

        roots = list(roots or [])
        if documents is not None:
            docs = [Document.coerce(d) for d in documents]
            docs = [Document(id=d.id, text=nfc(d.text), metadata=dict(d.metadata)) for d in docs]
            log.info("Indexing %d supplied documents", len(docs))
        elif roots:
            log.info("Loading documents from %s (unit=%s)", roots, unit or CFG.TEXT_UNIT)
            docs = load_documents(roots, unit=unit)
        else:
            raise ValueError("build(): at least one root folder or a document list is required")

        log.info("Building document index")
        idx = build_index(docs)

        if cache:
            log.info("Saving index snapshot to %s", cache)
            save_index(IndexSnapshot(index=idx, documents=docs), cache)

        # Commit engine state
        self._commit(docs, idx)
        log.info("Engine build() complete: documents=%d terms=%d", len(docs), len(idx.terms))

    # /* ~~~ Load an already-built snapshot ~~~ */
    def load(self, *, cache: Optional[str] = None, verbose: bool = False) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ[VERBOSE_ENV] = "1"

        if not cache:
            raise ValueError("load(): require --cache to load an index")
        if not os.path.exists(cache):
            raise FileNotFoundError(cache)

        log.info("Loading index snapshot from %s", cache)
        snapshot = load_index(cache)
        self._commit(list(snapshot.documents), snapshot.index)
        log.info("Engine load() complete: documents=%d", len(self._documents))

    # ------------- query -------------

    # /* ~~~ Run a sandhi-aware search over the indexed documents ~~~ */
    def search(self, term: str, *, pratika: bool = False) -> List[DocumentResult]:
        if self.index is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        if not isinstance(term, str) or not term.strip():
            return []
        term = nfc(term.strip())
        candidates = query_index(term, self.index, self._documents,
                                 variants=self.index_variants(term, pratika),
                                 case_sensitive=self.searcher.config.case_sensitive)
        log.info("Searching %d of %d documents for %r", len(candidates), len(self._documents), term)
        return self.searcher.search_multiple(term, candidates, pratika=pratika)

    def index_variants(self, term: str, pratika: bool = False) -> List[str]:
        """Surface forms worth looking up in the index besides the term itself."""
        forms = list(phonetic_variants(term, self.searcher.phonetic_table))
        forms.extend(v.text for v in self.searcher.splitter.split_variants(term))
        if pratika:
            forms.extend(v.text for v in expand_quotation_variants(term, self.searcher.ending_map))
        return list(dict.fromkeys(forms))

    def classify(self, text: str) -> PratikaAnalysis:
        return self.identifier.classify(text)

    # ------------- teardown -------------

    def shutdown(self) -> None:
        self._documents = []
        self._by_id = {}
        self.index = None
        log.info("Engine shutdown complete")
