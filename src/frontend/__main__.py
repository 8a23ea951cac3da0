from __future__ import annotations
import argparse, sys, json
from sanskrit_search import Engine
from sanskrit_search.loader import UNITS


def _print_results(results, as_json: bool) -> None:
    if as_json:
        print(json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2))
        return
    if not results:
        print("(no matches)")
        return
    print("#  Type             Offset     Source                         Context")
    i = 0
    for doc in results:
        for m in doc.result.matches:
            i += 1
            off = f"({m.position},{m.length})"
            print(f"{i:<2} {m.type.value:<16} {off:<10} {doc.id:<30} {m.context.full}")


def _print_analysis(analysis, as_json: bool) -> None:
    if as_json:
        print(json.dumps(analysis.to_dict(), ensure_ascii=False, indent=2))
        return
    if not analysis.is_pratika:
        print(f"not a pratika: {analysis.description}")
        return
    print(f"stem={analysis.stem} rule={analysis.rule_id} "
          f"confidence={analysis.confidence} ending={analysis.iti_ending!r}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Sanskrit pratika / sandhi-aware search CLI (Engine-backed)")
    g = p.add_mutually_exclusive_group()
    g.add_argument("--build", action="store_true", help="Build index from --roots")
    g.add_argument("--load", action="store_true", help="Load an existing index snapshot")

    p.add_argument("--roots", nargs="+", default=[], help="Folders to scan for .txt")
    p.add_argument("--cache", default=None, help="Pickle path for the index snapshot")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--q", default=None, help="Single search term to run once")
    p.add_argument("--pratika", action="store_true", help="Also match the term's इति quotation forms")
    p.add_argument("--classify", default=None, metavar="TEXT", help="Classify TEXT as a pratika and exit")
    p.add_argument("--unit", choices=list(UNITS), help="Text unit")
    p.add_argument("--json", action="store_true", help="Emit JSON")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    eng = Engine()
    if args.classify is not None:
        _print_analysis(eng.classify(args.classify), args.json)
        if not (args.build or args.load):
            return 0

    if not (args.build or args.load):
        p.error("one of --build or --load is required")

    try:
        if args.build:
            if not args.roots:
                p.error("--build requires --roots")
            eng.build(roots=args.roots, cache=args.cache, unit=args.unit, verbose=args.verbose)
        else:
            if not args.cache:
                p.error("--load requires --cache")
            eng.load(cache=args.cache, verbose=args.verbose)

        def run_query(q: str):
            _print_results(eng.search(q, pratika=args.pratika), args.json)

        if args.q:
            run_query(args.q)

        if args.repl:
            print("Type a term (empty line to exit). Prefix with '?' to classify a pratika.")
            while True:
                try:
                    q = input("> ").strip()
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                if q.startswith("?"):
                    _print_analysis(eng.classify(q[1:]), args.json)
                else:
                    run_query(q)

        return 0
    except (FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
