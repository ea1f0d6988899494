"""
Command-line interface for classifying emails with a trained model.

Usage:
    # Single message
    python -m mail_vsm.cli.classify --model models/trained_model.json \
        --subject "Verify your account now" --sender security@fake-bank.com

    # JSON array or JSONL of {subject, sender, body} objects
    python -m mail_vsm.cli.classify --model models/trained_model.json --input inbox.jsonl

    # Model path from the environment
    export MODEL_PATH=models/trained_model.json
    python -m mail_vsm.cli.classify --input inbox.json --output results.jsonl
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from mail_vsm.classification.service import VSMClassifierService
from mail_vsm.config import settings
from mail_vsm.logging_config import setup_logging


# Setup logging
setup_logging()
logger = structlog.get_logger(__name__)


def read_messages(input_path: Path) -> List[Dict[str, Any]]:
    """
    Read messages from a JSON array or a JSONL file.

    Raises:
        ValueError: If the file holds neither format
    """
    text = input_path.read_text(encoding="utf-8").strip()
    if not text:
        return []

    if text.startswith("["):
        messages = json.loads(text)
    else:
        messages = [json.loads(line) for line in text.splitlines() if line.strip()]

    if not all(isinstance(m, dict) for m in messages):
        raise ValueError(f"Expected JSON objects in {input_path}")
    return messages


def classify_messages(service: VSMClassifierService, messages: List[Dict[str, Any]]) -> List[dict]:
    """Classify messages, echoing an ``id`` field when present."""
    results = []
    for message in messages:
        result = service.classify(
            message.get("subject") or "",
            message.get("sender") or "",
            message.get("body") or message.get("text") or "",
        ).model_dump()
        if "id" in message:
            result = {"id": message["id"], **result}
        results.append(result)
    return results


def write_output(results: List[dict], output_path: Optional[Path]) -> None:
    """Write results as JSONL to a file or stdout."""
    lines = [json.dumps(result, ensure_ascii=False) for result in results]

    if not output_path:
        for line in lines:
            print(line)
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")

    logger.info("output_written", path=str(output_path), count=len(results))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classify emails with a trained vector space model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--model",
        "-m",
        type=str,
        default=settings.model_path,
        help="Model artifact path (default: MODEL_PATH setting)",
    )
    parser.add_argument("--subject", "-s", type=str, default="", help="Subject of a single message")
    parser.add_argument("--sender", type=str, default="", help="Sender of a single message")
    parser.add_argument("--body", "-b", type=str, default="", help="Body of a single message")
    parser.add_argument(
        "--input", "-i", type=str, default=None, help="JSON array or JSONL file of messages"
    )
    parser.add_argument(
        "--output", "-o", type=str, default=None, help="JSONL output path (default: stdout)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    if not args.model:
        print("Error: no model given (use --model or set MODEL_PATH)", file=sys.stderr)
        return 1

    service = VSMClassifierService(artifact_path=args.model)
    if not service.is_trained:
        # Still usable: every message goes through the sender fallback
        logger.warning("classifying_without_centroids", model=args.model)

    if args.input:
        input_path = Path(args.input)
        if not input_path.exists():
            print(f"Error: Path not found: {input_path}", file=sys.stderr)
            return 1
        try:
            messages = read_messages(input_path)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        messages = [{"subject": args.subject, "sender": args.sender, "body": args.body}]

    results = classify_messages(service, messages)
    write_output(results, Path(args.output) if args.output else None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
