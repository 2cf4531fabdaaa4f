"""Structure résumé files into JSON records with the rule-based parser.

Usage
-----

    python scripts/parse_resumes.py resumes/*.pdf --output data/resumes_parsed.json

Each input file becomes one record ``{"file": ..., "parsed": {...}}`` whose
``parsed`` value is ``ResumeParsed.to_dict()``. Files that cannot be read are
reported and skipped.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Dict, List

ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from data_loader import load_resume_text  # noqa: E402
from services.resume_service import structure_resume  # noqa: E402
from structuring.debug import set_debug  # noqa: E402
from structuring.settings import load_config  # noqa: E402

logger = logging.getLogger("parse_resumes")


def build_records(paths: List[Path]) -> List[Dict[str, object]]:
    config = load_config()
    records: List[Dict[str, object]] = []
    for path in paths:
        try:
            text = load_resume_text(path)
        except Exception as err:  # missing, unsupported or corrupt file
            logger.warning("skipping %s: %s", path, err)
            continue
        parsed, source = structure_resume(text, config=config)
        records.append({"file": path.name, "source": source, "parsed": parsed.to_dict()})
    return records


def main() -> None:
    parser = argparse.ArgumentParser(description="Structure résumé files into JSON records")
    parser.add_argument("inputs", nargs="+", help="Résumé files (.pdf, .docx, .txt)")
    parser.add_argument("--output", required=True, help="Destination JSON file")
    parser.add_argument("--debug", action="store_true", help="Print parser trace lines")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    set_debug(args.debug)

    records = build_records([Path(p) for p in args.inputs])

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as fh:
        json.dump(records, fh, indent=2, ensure_ascii=False)

    print(f"Wrote {len(records)} resumes to {output_path}")


if __name__ == "__main__":
    main()
