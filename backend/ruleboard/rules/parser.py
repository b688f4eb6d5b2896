# backend/ruleboard/rules/parser.py
"""
Import rule records from the plain-text extraction of the rules document.

The extracted text is a flattened table: a section header line, then for each
rule its number, the rule text (one or more lines), a classification line,
the reason (one or more lines) and a risk level line.

Run with: python -m ruleboard.rules.parser "Rules Segregation.docx" data/rules.json
(.pdf and already extracted .txt sources work too)
"""

import argparse
import json
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from ruleboard.rules.extract import extract_text
from ruleboard.rules.models import AI_AGENTS, AI_RAG, HARD_LOGIC, SECTIONS, Rule

logger = logging.getLogger(__name__)

TITLE_LIMIT = 60

TABLE_HEADERS = {"Rule No", "Rule", "Classification", "Reason", "Risk Level"}
GROUP_HEADERS = ("Hard Logic Rules:", "AI Rules", "AI-General:", "AI-RAG:")
RISK_PREFIXES = ("High", "Med", "Low")

_RULE_NUMBER = re.compile(r"^\d+$")


def _is_boundary(line: str) -> bool:
    return bool(_RULE_NUMBER.match(line)) or line in SECTIONS


def _is_classification(line: str) -> bool:
    return line.startswith("Hard Logic") or line.startswith("AI-")


def normalize_rule_type(classification: str) -> str:
    if "Hard Logic" in classification:
        return HARD_LOGIC
    if "AI-General" in classification or "AI Agents" in classification:
        return AI_AGENTS
    if "AI-RAG" in classification:
        return AI_RAG
    return classification


def make_rule_id(section: str, rule_no: str) -> str:
    return f"{section[:2].upper()}-{rule_no.zfill(3)}"


def make_title(text: str) -> str:
    if len(text) > TITLE_LIMIT:
        return text[:TITLE_LIMIT] + "..."
    return text


def _read_rule(lines: List[str], start: int) -> Tuple[int, List[str], Optional[str], List[str], Optional[str]]:
    """Collect text, classification, reason and risk for the rule starting after `start`."""
    ptr = start + 1
    text: List[str] = []
    reason: List[str] = []
    classification = None
    risk = None

    while ptr < len(lines):
        line = lines[ptr]
        if _is_classification(line):
            classification = line
            ptr += 1
            break
        if _is_boundary(line):
            break
        text.append(line)
        ptr += 1

    if classification:
        while ptr < len(lines):
            line = lines[ptr]
            if line.startswith(RISK_PREFIXES):
                risk = line
                ptr += 1
                break
            if _is_boundary(line):
                break
            reason.append(line)
            ptr += 1

    return ptr, text, classification, reason, risk


def parse_rules_text(raw_text: str) -> List[Rule]:
    lines = [line.strip() for line in raw_text.splitlines()]
    lines = [line for line in lines if line]

    rules: List[Rule] = []
    section = ""
    i = 0

    while i < len(lines):
        line = lines[i]

        if line in SECTIONS:
            section = line
            i += 1
            continue

        if line in TABLE_HEADERS or any(h in line for h in GROUP_HEADERS):
            i += 1
            continue

        if not _RULE_NUMBER.match(line):
            i += 1
            continue

        ptr, text, classification, reason, risk = _read_rule(lines, i)
        rule_text = " ".join(text)

        if not (rule_text and classification):
            i += 1
            continue

        reason_text = " ".join(reason)
        rules.append(
            Rule(
                id=make_rule_id(section, line),
                title=make_title(rule_text),
                description=rule_text,
                indicators=[reason_text] if reason_text else [],
                section=section,
                type=normalize_rule_type(classification),
                risk=risk or "Unknown",
            )
        )
        i = ptr

    return rules


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Parse the rules document into a rules.json document")
    parser.add_argument("source", type=Path, help="rules document (.docx, .pdf) or its plain-text extraction (.txt)")
    parser.add_argument("output", type=Path, nargs="?", default=Path("data/rules.json"))
    parser.add_argument("--text-out", type=Path, help="also write the extracted text here")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    try:
        text = extract_text(args.source)
    except ValueError as e:
        parser.error(str(e))
    if args.text_out:
        args.text_out.write_text(text, encoding="utf-8")
        logger.info("Text extracted successfully to %s", args.text_out)

    rules = parse_rules_text(text)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(
        json.dumps([r.to_dict() for r in rules], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info("Successfully parsed %d use cases into %s", len(rules), args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
