"""Public API for Sanskrit pratika detection and sandhi-aware search."""
from __future__ import annotations
import os, time, logging
from sanskrit_search.config import SearchConfig
from sanskrit_search.models import (
    Document,
    DocumentResult,
    MatchType,
    PratikaAnalysis,
    SearchMatch,
    SearchResult,
    Variant,
)
from sanskrit_search.pratika import (
    PratikaIdentifier,
    classify,
    extract_searchable_forms,
    extract_stem,
    generate_pratika_forms,
    is_pratika,
)
from sanskrit_search.itimap import ITI_SANDHI_MAP, expand_quotation_variants
from sanskrit_search.phonetic import phonetic_variants
from sanskrit_search.sandhi import SandhiSplitter, split_variants
from sanskrit_search.search import SanskritSearch
from sanskrit_search.highlight import highlight_matches
from sanskrit_search.engine import Engine

log = logging.getLogger(__name__)

_engine: Engine | None = None


def initialize(paths: list[str],
               cache: str | None = None,
               rebuild: bool = False,
               verbose: bool = False,
               unit: str | None = None) -> Engine:
    """
    Init modes:
      1) Fast-start: cache exists and not rebuilding -> load the snapshot.
      2) Otherwise scan `paths` with the given text unit (and write `cache` if given).
    """
    global _engine
    t0 = time.perf_counter()
    eng = Engine()
    if cache and not rebuild and os.path.exists(cache):
        eng.load(cache=cache, verbose=verbose)
    else:
        eng.build(roots=paths, cache=cache, unit=unit, verbose=verbose)
    _engine = eng
    log.info("[ready] init complete in %.2fs", time.perf_counter() - t0)
    return eng


def search(term: str, pratika: bool = False) -> list[DocumentResult]:
    """Per-document results for `term` over the initialized corpus."""
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call initialize(...) first.")
    return _engine.search(term, pratika=pratika)


__all__ = [
    "Document",
    "DocumentResult",
    "Engine",
    "ITI_SANDHI_MAP",
    "MatchType",
    "PratikaAnalysis",
    "PratikaIdentifier",
    "SandhiSplitter",
    "SanskritSearch",
    "SearchConfig",
    "SearchMatch",
    "SearchResult",
    "Variant",
    "classify",
    "expand_quotation_variants",
    "extract_searchable_forms",
    "extract_stem",
    "generate_pratika_forms",
    "highlight_matches",
    "initialize",
    "is_pratika",
    "phonetic_variants",
    "search",
    "split_variants",
]
