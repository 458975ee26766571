#!/usr/bin/env python3
from __future__ import annotations

import argparse
import csv
import json
import os
import sys
from typing import Dict, List, Optional, Tuple

# Make advisor-backend importable
THIS_DIR = os.path.dirname(__file__)
BACKEND_DIR = os.path.abspath(os.path.join(THIS_DIR, "..", "advisor-backend"))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from advisor.crs.errors import NotFoundError  # type: ignore
from advisor.crs.model import TransformationPath  # type: ignore
from advisor.crs.resolver import PathResolver  # type: ignore
from advisor.crs.suggest import suggest_transformation  # type: ignore
from catalog.loader import catalog_path, read_catalog  # type: ignore


def _fmt_path(p: Optional[TransformationPath]) -> str:
    if p is None or not p.steps:
        return "-"
    chain = " -> ".join([p.steps[0].source] + [s.target for s in p.steps])
    return f"{chain} [{p.complexity}; {p.total_accuracy}]"


def read_pairs(path: str) -> List[Tuple[str, str]]:
    """CSV with ``source,target`` columns (header optional, '#' lines skipped)."""
    pairs: List[Tuple[str, str]] = []
    with open(path, newline="", encoding="utf-8") as f:
        for row in csv.reader(f):
            if not row or row[0].strip().startswith("#"):
                continue
            if len(row) < 2:
                continue
            src, tgt = row[0].strip(), row[1].strip()
            if src.lower() == "source":
                continue
            pairs.append((src, tgt))
    return pairs


def parse_pair(text: str) -> Tuple[str, str]:
    # "4301:6668", "EPSG:4301:EPSG:6668" or "4301,6668"
    if "," in text:
        a, b = text.split(",", 1)
        return a.strip(), b.strip()
    parts = text.split(":")
    if len(parts) == 2:
        return parts[0].strip(), parts[1].strip()
    if len(parts) == 4:
        return f"{parts[0]}:{parts[1]}", f"{parts[2]}:{parts[3]}"
    raise argparse.ArgumentTypeError(f"cannot parse pair {text!r}")


def evaluate_pairs(pairs: List[Tuple[str, str]], catalog_file: str, fmt: str = "pretty") -> Tuple[List[dict], dict]:
    catalog = read_catalog(catalog_file)
    resolver = PathResolver()
    results: List[dict] = []
    agg: Dict[str, int] = {
        "pairs": 0,
        "direct": 0,
        "via": 0,
        "not_found": 0,
        "complex": 0,
        "warnings": 0,
    }

    for src, tgt in pairs:
        agg["pairs"] += 1
        try:
            res = suggest_transformation(src, tgt, catalog=catalog, resolver=resolver)
        except NotFoundError as e:
            agg["not_found"] += 1
            results.append({"source": src, "target": tgt, "status": "not_found", "error": str(e)})
            continue

        status = "direct" if res.direct_path is not None else "via"
        if not res.recommended.steps:
            status = "same"
        if status in ("direct", "via"):
            agg[status] += 1
        if res.recommended.complexity == "complex":
            agg["complex"] += 1
        agg["warnings"] += len(res.warnings)
        results.append({
            "source": src,
            "target": tgt,
            "status": status,
            "recommended": _fmt_path(res.recommended),
            "steps": len(res.recommended.steps),
            "alternatives": len(res.via_paths),
            "warnings": list(res.warnings),
        })

    if fmt == "pretty":
        print(f"catalog {catalog.version} ({len(catalog.transformations)} records)")
        for r in results:
            print(f"\n=== {r['source']} -> {r['target']} ({r['status']}) ===")
            if r["status"] == "not_found":
                print(f"  {r['error']}")
                continue
            print(f"  recommended: {r['recommended']}")
            print(f"  alternatives: {r['alternatives']}")
            for w in r["warnings"]:
                print(f"  ! {w}")
        print("\n--- aggregate ---")
        print(json.dumps(agg, indent=2))
    return results, agg


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Run transformation-path suggestions for a batch of CRS pairs.")
    ap.add_argument("--pairs", help="CSV file of source,target CRS codes")
    ap.add_argument("--pair", action="append", type=parse_pair, default=[], help="Single pair, e.g. 4301:6668 (repeatable)")
    ap.add_argument("--catalog", default=catalog_path(), help="Transformation catalog JSON")
    ap.add_argument("--format", choices=["pretty", "json", "csv"], default="pretty")
    ap.add_argument("--output", help="Optional path to write JSON/CSV output")
    args = ap.parse_args(argv)

    pairs = list(args.pair)
    if args.pairs:
        pairs.extend(read_pairs(args.pairs))
    if not pairs:
        print("No pairs given. Use --pairs FILE or --pair SRC:TGT.")
        return 1

    results, agg = evaluate_pairs(pairs, args.catalog, fmt="pretty" if args.format == "pretty" else "json")

    if args.output:
        if args.format == "json":
            payload = {"aggregate": agg, "results": results}
            with open(args.output, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            print(f"Wrote JSON to {args.output}")
        elif args.format == "csv":
            with open(args.output, "w", newline="", encoding="utf-8") as f:
                w = csv.writer(f)
                w.writerow(["source", "target", "status", "steps", "recommended", "warnings"])
                for r in results:
                    w.writerow([
                        r["source"],
                        r["target"],
                        r["status"],
                        r.get("steps", ""),
                        r.get("recommended", ""),
                        " | ".join(r.get("warnings", [])),
                    ])
            print(f"Wrote CSV to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
