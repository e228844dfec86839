import argparse
import asyncio
import logging
import sys

from .config import Settings
from .demo import demo_analysis
from .models import AnalysisState, PipelineFailure
from .pipeline import AnalysisOrchestrator
from .render import render_failure, render_markdown_report

PROGRESS = {
    AnalysisState.FETCHING: "Fetching product page...",
    AnalysisState.GENERATING: "Generating optimization suggestions...",
}

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Analyze an Amazon listing and suggest optimizations.")
    p.add_argument('input', nargs='?', help='ASIN (e.g. B08N5WRWNW) or Amazon product URL')
    p.add_argument('--demo', action='store_true', help='render the built-in sample analysis, no network')
    p.add_argument('--out', default='report.md')
    p.add_argument('-v', '--verbose', action='store_true')
    args = p.parse_args(argv)
    if not args.demo and not args.input:
        p.error('input is required unless --demo is given')
    return args

def _progress(state: AnalysisState) -> None:
    msg = PROGRESS.get(state)
    if msg:
        print(msg, file=sys.stderr)

async def _analyze(raw: str):
    orchestrator = AnalysisOrchestrator.from_settings(Settings.from_env(), on_state=_progress)
    try:
        return await orchestrator.analyze(raw)
    finally:
        await orchestrator.aclose()

def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.demo:
        outcome = demo_analysis()
    else:
        outcome = asyncio.run(_analyze(args.input))

    if isinstance(outcome, PipelineFailure):
        print(render_failure(outcome), file=sys.stderr)
        return 1

    md = render_markdown_report(outcome)
    with open(args.out, 'w', encoding='utf-8') as f:
        f.write(md)
    print(f'Wrote {args.out}')
    return 0

if __name__ == '__main__':
    raise SystemExit(main())
