#!/usr/bin/env python3
"""Entry point: recommend jobs for (or analyze) a resume file.

Usage:
  python run_recommender.py resume.pdf             # ranked job recommendations
  python run_recommender.py resume.pdf --analyze   # AI review + ATS checklist
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from resumefit.errors import ResumeFitError
from resumefit.log import get_logger

log = get_logger(__name__)


async def _main(path: Path, analyze: bool) -> str:
    from resumefit.config import oracle_timeout
    from resumefit.oracle import OracleGate, initialize_default

    gate = OracleGate()
    asyncio.get_running_loop().call_soon(initialize_default, gate)
    await gate.wait_ready(timeout=oracle_timeout())

    if analyze:
        from resumefit.analyzer import analyze_file
        from resumefit.report import build_analysis_report

        report, checklist = await analyze_file(path, gate)
        return build_analysis_report(report, checklist)

    from resumefit.recommender import recommend_from_file
    from resumefit.report import build_recommendation_report

    ranked = await recommend_from_file(path, gate)
    return build_recommendation_report(ranked)


def main(argv: list[str]) -> int:
    args = [a for a in argv if not a.startswith("--")]
    if len(args) != 1:
        print(__doc__)
        return 2
    path = Path(args[0])
    if not path.is_file():
        log.error("Resume file not found: %s", path)
        return 2

    try:
        output = asyncio.run(_main(path, analyze="--analyze" in argv))
    except ResumeFitError as exc:
        log.error("%s: %s", exc.__class__.__name__, exc.message)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
