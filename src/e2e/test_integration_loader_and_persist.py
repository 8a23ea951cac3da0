from pathlib import Path
import logging
import pytest
from sanskrit_search.engine import Engine
from sanskrit_search.loader import load_documents
from sanskrit_search.DB import IndexSnapshot, build_index, save_index

def _seed(tmp: Path) -> str:
    root = tmp / "Archive"; root.mkdir()
    (root / "a.txt").write_text(
        "यदा यदा हि धर्मस्य ग्लानिर्भवति भारत।\n"
        "अभ्युत्थानमधर्मस्य तदात्मानं सृजाम्यहम्॥\n"
        "\n"
        "परित्राणाय साधूनां विनाशाय च दुष्कृताम्।\n",
        encoding="utf-8",
    )
    sub = root / "sub"; sub.mkdir()
    (sub / "b.txt").write_text("cafe\u0301 रामः\n", encoding="utf-8")
    (sub / "ignored.md").write_text("रामः\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_line_units(tmp_path: Path):
    docs = load_documents([_seed(tmp_path)], unit="line")
    assert [d.id for d in docs] == ["a.txt:0", "a.txt:1", "a.txt:3", "sub/b.txt:0"]
    assert docs[2].metadata == {"path": "a.txt", "line_no": 3}

@pytest.mark.e2e
def test_paragraph_units(tmp_path: Path):
    docs = load_documents([_seed(tmp_path)], unit="paragraph")
    assert [d.id for d in docs] == ["a.txt:0", "a.txt:3", "sub/b.txt:0"]
    assert docs[0].text.count("\n") == 1

@pytest.mark.e2e
def test_file_units(tmp_path: Path):
    docs = load_documents([_seed(tmp_path)], unit="file")
    assert [d.id for d in docs] == ["a.txt", "sub/b.txt"]
    assert docs[0].metadata["line_no"] == 0

@pytest.mark.e2e
def test_loader_normalizes_to_nfc(tmp_path: Path):
    docs = load_documents([_seed(tmp_path)])
    assert docs[-1].text == "caf\u00e9 रामः"

@pytest.mark.e2e
def test_multiple_roots(tmp_path: Path):
    r1 = tmp_path / "A"; r1.mkdir()
    r2 = tmp_path / "B"; r2.mkdir()
    (r1 / "one.txt").write_text("हरिः ॐ\n", encoding="utf-8")
    (r2 / "two.txt").write_text("हरिरेव\n", encoding="utf-8")
    eng = Engine()
    try:
        eng.build(roots=[str(r1), str(r2)])
        assert [r.id for r in eng.search("हरि")] == ["one.txt:0", "two.txt:0"]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_verbose_progress_is_logged(tmp_path: Path, monkeypatch, caplog):
    monkeypatch.setenv("SANSKRIT_SEARCH_VERBOSE", "1")
    caplog.set_level(logging.INFO)
    load_documents([_seed(tmp_path)])
    assert "[done] files=2 documents=4" in caplog.text

@pytest.mark.e2e
def test_persist_snapshot_and_reload(tmp_path: Path):
    roots = _seed(tmp_path)
    cache = tmp_path / "cache" / "index.pkl"

    e1 = Engine()
    e1.build(roots=[roots], cache=str(cache))
    before = [(r.id, r.count) for r in e1.search("धर्मस्य")]
    e1.shutdown()

    assert cache.exists()
    assert not Path(str(cache) + ".tmp").exists()

    e2 = Engine()
    try:
        e2.load(cache=str(cache))
        assert e2.document_count() == 4
        after = [(r.id, r.count) for r in e2.search("धर्मस्य")]
        assert after == before
        assert [i for i, _ in after] == ["a.txt:0", "a.txt:1"]
    finally:
        e2.shutdown()

@pytest.mark.e2e
def test_failed_snapshot_write_leaves_no_temp_file(tmp_path: Path):
    cache = tmp_path / "index.pkl"
    broken = IndexSnapshot(index=build_index([]), documents=[lambda: None])
    with pytest.raises(Exception):
        save_index(broken, str(cache))
    assert not cache.exists()
    assert not Path(str(cache) + ".tmp").exists()

@pytest.mark.e2e
def test_ids_are_relative_to_the_given_root(tmp_path: Path):
    root = _seed(tmp_path)
    docs = load_documents([str(Path(root) / "sub")], unit="file")
    assert [d.id for d in docs] == ["b.txt"]
