from __future__ import annotations
import logging
import os
from typing import Iterable, List

from .models import Document
from .normalize import nfc
from .config import TEXT_UNIT

log = logging.getLogger(__name__)

# Progress logging (set SANSKRIT_SEARCH_VERBOSE=1 to enable)
VERBOSE_ENV = "SANSKRIT_SEARCH_VERBOSE"
PROGRESS_EVERY_DOCUMENTS = 10_000
PROGRESS_EVERY_FILES = 500

UNITS = ("file", "line", "paragraph")


def _iter_txt_files(roots: Iterable[str]) -> Iterable[tuple[str, str]]:
    """(path relative to its root, absolute path) for every *.txt, sorted per directory."""
    for root in map(os.path.abspath, roots):
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for fn in sorted(f for f in filenames if f.lower().endswith(".txt")):
                path = os.path.join(dirpath, fn)
                yield os.path.relpath(path, root).replace(os.sep, "/"), path


def _doc(path_rel: str, line_no: int, text: str, with_line: bool = True) -> Document:
    doc_id = f"{path_rel}:{line_no}" if with_line else path_rel
    return Document(id=doc_id, text=nfc(text), metadata={"path": path_rel, "line_no": line_no})


def _yield_file_unit(lines: List[str], path_rel: str) -> Iterable[Document]:
    text = "\n".join(lines)
    if text.strip():
        yield _doc(path_rel, 0, text, with_line=False)


def _yield_line_units(lines: List[str], path_rel: str) -> Iterable[Document]:
    for i, raw in enumerate(lines):
        if raw.strip():
            yield _doc(path_rel, i, raw)


def _yield_paragraph_units(lines: List[str], path_rel: str) -> Iterable[Document]:
    block: List[str] = []
    block_start_line = 0
    for i, raw in enumerate(lines):
        if raw.strip() == "":
            if block:
                yield _doc(path_rel, block_start_line, "\n".join(block))
                block = []
            block_start_line = i + 1
        else:
            if not block:
                block_start_line = i
            block.append(raw)
    if block:
        yield _doc(path_rel, block_start_line, "\n".join(block))


def load_documents(roots: List[str], unit: str | None = None) -> List[Document]:
    """
    Scan roots for *.txt and return one Document per text unit.
    unit: "line" (default), "paragraph", or "file".
    Text is NFC-normalized here so every later offset refers to the same string.
    """
    verbose = os.environ.get(VERBOSE_ENV) == "1"
    documents: List[Document] = []

    unit = (unit or TEXT_UNIT).lower()
    if unit not in UNITS:
        raise ValueError(f"unknown text unit {unit!r}; expected one of {', '.join(UNITS)}")

    file_count = 0
    for rel, path in _iter_txt_files(roots):
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as f:
                raw_lines = [ln.rstrip("\r\n") for ln in f]
        except OSError as e:
            log.warning("Skipping unreadable file %s: %s", path, e)
            continue

        if unit == "file":
            gen = _yield_file_unit(raw_lines, rel)
        elif unit == "paragraph":
            gen = _yield_paragraph_units(raw_lines, rel)
        else:
            gen = _yield_line_units(raw_lines, rel)

        for doc in gen:
            documents.append(doc)
            if verbose and len(documents) % PROGRESS_EVERY_DOCUMENTS == 0:
                log.info("[loaded] documents=%s", f"{len(documents):,}")

        file_count += 1
        if verbose and file_count % PROGRESS_EVERY_FILES == 0:
            log.info("[scanned] files=%s", f"{file_count:,}")

    if verbose:
        log.info("[done] files=%s documents=%s", f"{file_count:,}", f"{len(documents):,}")
    return documents
