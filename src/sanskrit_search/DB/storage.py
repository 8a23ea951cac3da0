from __future__ import annotations
import os
import pickle
from dataclasses import dataclass
from typing import List

from ..models import Document
from .index import DocumentIndex


@dataclass(frozen=True)
class IndexSnapshot:
    index: DocumentIndex
    documents: List[Document]


def save_index(snapshot: IndexSnapshot, path: str) -> None:
    """Write `snapshot` next to `path` first; readers never see a half-written file."""
    folder = os.path.dirname(os.path.abspath(path))
    os.makedirs(folder, exist_ok=True)
    tmp = path + ".tmp"
    try:
        with open(tmp, "wb") as f:
            pickle.dump(snapshot, f, protocol=pickle.HIGHEST_PROTOCOL)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise


def load_index(path: str) -> IndexSnapshot:
    with open(path, "rb") as f:
        snapshot = pickle.load(f)
    if not isinstance(snapshot, IndexSnapshot):
        raise ValueError(f"{path} does not hold an index snapshot")
    return snapshot
