"""
Offline regression checks for the suggestion parser.

Each case under eval/cases is a recorded generation reply plus the bundle we
expect to get back from it. No network access is needed.

Usage:
    python3 -m eval.run_eval                     # run every case in eval/cases
    python3 -m eval.run_eval --case foo          # run just foo.json
    python3 -m eval.run_eval --verbose           # echo extra diagnostics
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from listing_ally.models import SuggestionBundle  # noqa
from listing_ally.suggestion_parser import parse  # noqa

CASES_DIR = Path(__file__).resolve().parent / "cases"


def _load_case(path: Path) -> Dict[str, object]:
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    data.setdefault("name", path.stem)
    return data


def _evaluate_case(case: Dict[str, object]) -> tuple[List[str], SuggestionBundle]:
    """Parse the recorded reply and collect human-friendly errors."""
    errors: List[str] = []
    bundle = parse(str(case.get("reply", "")))
    expectations: Dict[str, object] = case.get("expectations", {})

    count = expectations.get("suggestion_count")
    if isinstance(count, int) and len(bundle.suggestions) != count:
        errors.append(f"expected {count} suggestions, saw {len(bundle.suggestions)}")

    sections = expectations.get("sections")
    if sections is not None:
        seen = [s.type.value for s in bundle.suggestions]
        if seen != sections:
            errors.append(f"expected sections {sections}, saw {seen}")

    for key, actual in (("seo_score", bundle.seo_score), ("bsr_potential", bundle.bsr_potential)):
        expected = expectations.get(key)
        if isinstance(expected, int) and actual != expected:
            errors.append(f"{key}: expected {expected}, saw {actual}")

    keywords = expectations.get("keywords")
    if keywords is not None and bundle.keyword_opportunities != keywords:
        errors.append(f"keywords: expected {keywords}, saw {bundle.keyword_opportunities}")

    for idx, s in enumerate(bundle.suggestions, start=1):
        if not s.current or not s.suggested:
            errors.append(f"suggestion #{idx} is missing current/suggested text")

    if parse(str(case.get("reply", ""))) != bundle:
        errors.append("parser is not deterministic for this reply")

    return errors, bundle


def _print_debug(bundle: SuggestionBundle) -> None:
    """Pretty-print the parsed bundle to help validate failures."""
    print("    seo:", bundle.seo_score, "bsr:", f"{bundle.bsr_potential}%")
    print("    keywords:", ", ".join(bundle.keyword_opportunities) or "(none)")
    for idx, s in enumerate(bundle.suggestions, start=1):
        print(f"      {idx}. [{s.type.value}] {s.suggested[:80]}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Run parser eval cases for Listing Ally.")
    parser.add_argument(
        "--case",
        metavar="NAME",
        help="Run a single case (matches <NAME>.json inside eval/cases).",
    )
    parser.add_argument(
        "--cases-dir",
        type=Path,
        default=CASES_DIR,
        help="Directory of recorded replies (default: eval/cases).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print extra diagnostics (always shown on failures).",
    )
    args = parser.parse_args()

    cases_dir: Path = args.cases_dir
    case_paths = sorted(cases_dir.glob("*.json")) if cases_dir.exists() else []
    if not case_paths:
        print(f"No cases found. Add JSON files under {cases_dir}.", file=sys.stderr)
        return 1

    if args.case:
        matches = [p for p in case_paths if p.stem == args.case]
        if not matches:
            print(f"Case '{args.case}' not found.", file=sys.stderr)
            return 1
        case_paths = matches

    overall_errors = 0
    for path in case_paths:
        case = _load_case(path)
        errors, bundle = _evaluate_case(case)
        if errors:
            overall_errors += 1
            print(f"[FAIL] {case['name']}")
            for err in errors:
                print(f"  - {err}")
            _print_debug(bundle)
        else:
            print(f"[PASS] {case['name']}")
            if args.verbose:
                _print_debug(bundle)

    return 1 if overall_errors else 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
