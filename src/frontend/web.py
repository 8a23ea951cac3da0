from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from sanskrit_search.engine import Engine
from sanskrit_search.highlight import highlight_matches
from sanskrit_search.itimap import expand_quotation_variants
from sanskrit_search.loader import UNITS
from sanskrit_search.normalize import nfc
from sanskrit_search.phonetic import phonetic_variants
from sanskrit_search.sandhi import split_variants

app = Flask(__name__)
app.json.ensure_ascii = False
_engine: Engine | None = None

MODES = ("auto", "pratika")


def _not_ready():
    return jsonify({"error": "engine not initialized"}), 503


def _text_of(doc_id: str) -> str:
    doc = _engine.document(doc_id)  # type: ignore[union-attr]
    return doc.text if doc is not None else ""


# ---------- API ----------
@app.get("/api/search")
def api_search():
    if _engine is None or not _engine.ready:
        return _not_ready()
    q = request.args.get("q", "", type=str).strip()
    mode = request.args.get("mode", "auto", type=str)
    if mode not in MODES:
        return jsonify({"error": f"mode must be one of {', '.join(MODES)}"}), 400
    if not q:
        return jsonify({"term": "", "mode": mode, "count": 0, "results": []})

    results = _engine.search(q, pratika=(mode == "pratika"))
    rows = []
    for doc in results:
        row = doc.to_dict()
        row["html"] = str(highlight_matches(_text_of(doc.id), doc.result.matches,
                                            _engine.searcher.config.highlight_class))
        rows.append(row)
    return jsonify({
        "term": nfc(q),
        "mode": mode,
        "count": sum(doc.count for doc in results),
        "results": rows,
    })


@app.get("/api/pratika")
def api_pratika():
    text = request.args.get("text", "", type=str)
    if _engine is None:
        return _not_ready()
    analysis = _engine.classify(text)
    out = analysis.to_dict()
    if analysis.is_pratika:
        out["searchableForms"] = _engine.identifier.extract_searchable_forms(text)
    return jsonify(out)


@app.get("/api/variants")
def api_variants():
    q = nfc(request.args.get("q", "", type=str).strip())
    if not q:
        return jsonify({"term": "", "phonetic": [], "sandhi": [], "quotation": []})
    return jsonify({
        "term": q,
        "phonetic": phonetic_variants(q),
        "sandhi": [{"text": v.text, "ruleId": v.rule_id} for v in split_variants(q)],
        "quotation": [{"text": v.text, "ruleId": v.rule_id} for v in expand_quotation_variants(q)],
    })


@app.get("/health")
def health():
    ready = _engine is not None and _engine.ready
    docs = _engine.document_count() if ready else 0  # type: ignore[union-attr]
    return jsonify({"ok": ready, "documents": docs}), (200 if ready else 503)


# ---------- UI ----------
@app.get("/")
def home():
    # One page: a search box over /api/search, highlighting done server-side.
    html = r"""
<!doctype html>
<html lang="sa">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Sanskrit Search • Flask UI</title>
<style>
:root{
  --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6;
  --accent:#6ee7ff; --border:#1c2530; --mark-bg:rgba(110,231,255,.2);
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:17px/1.6 "Noto Sans Devanagari",system-ui,-apple-system,Segoe UI,Roboto,Arial;
}
.container{ max-width:980px; margin:24px auto; padding:0 16px }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px }
h1{ font-size:20px; margin:0 0 8px 0 }
.controls{ display:flex; gap:12px; align-items:center; flex-wrap:wrap }
.controls input[type=text]{
  flex:1; min-width:240px; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:17px;
}
.controls input[type=text]:focus{ border-color:var(--accent) }
.meta{ color:var(--muted); font-size:13px; margin-top:6px }
.row{ padding:12px 14px; border-top:1px solid var(--border) }
.src{ color:var(--muted); font-size:12px }
.search-highlight{ background:var(--mark-bg); border-bottom:1px solid var(--accent) }
.search-highlight[data-type="pratika-grahana"]{ border-bottom-style:dashed }
.empty{ padding:24px; text-align:center; color:var(--muted) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Sanskrit Search</h1>
      <div class="controls">
        <input id="q" type="text" placeholder="देव, नारायणं, रामेति…" autocomplete="off" autofocus />
        <label><input id="pratika" type="checkbox" /> pratika-grahana</label>
      </div>
      <div id="stats" class="meta">Ready.</div>
      <div id="out" class="empty">Type a term and press Enter.</div>
    </div>
  </div>
<script>
const $ = (s) => document.querySelector(s);
const q = $("#q"), out = $("#out"), stats = $("#stats"), pratika = $("#pratika");

async function search(){
  const term = q.value.trim();
  if(!term){ out.className = "empty"; out.innerHTML = "Type a term and press Enter."; return; }
  const mode = pratika.checked ? "pratika" : "auto";
  const resp = await fetch(`/api/search?q=${encodeURIComponent(term)}&mode=${mode}`);
  if(!resp.ok){ stats.textContent = `Error: HTTP ${resp.status}`; return; }
  const data = await resp.json();
  stats.textContent = `Matches: ${data.count} in ${data.results.length} documents`;
  if(!data.results.length){ out.className = "empty"; out.innerHTML = "No matches."; return; }
  out.className = "";
  out.innerHTML = data.results.map(r =>
    `<div class="row"><div class="src">${r.id}</div><div>${r.html}</div></div>`).join("");
}
q.addEventListener("keydown", (ev) => { if(ev.key === "Enter") search(); });
pratika.addEventListener("change", search);
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    mode = ap.add_mutually_exclusive_group(required=True)
    mode.add_argument("--build", action="store_true")
    mode.add_argument("--load", action="store_true")
    ap.add_argument("--roots", nargs="+", default=[])
    ap.add_argument("--cache", default=None)
    ap.add_argument("--unit", choices=list(UNITS))
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    if args.build:
        if not args.roots:
            ap.error("--build requires --roots")
        _engine.build(roots=args.roots, cache=args.cache, unit=args.unit, verbose=args.verbose)
    else:
        _engine.load(cache=args.cache, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
