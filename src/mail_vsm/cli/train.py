"""
Command-line interface for offline model training.

Turns a labeled corpus (JSON array) into a model artifact.

Usage:
    python -m mail_vsm.cli.train training-corpus.json

    python -m mail_vsm.cli.train training-corpus.json --output models/trained_model.json

    # Force the pruning threshold regardless of corpus size
    python -m mail_vsm.cli.train corpus.json --min-doc-freq 2
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from mail_vsm.classification.model_store import save_artifact
from mail_vsm.logging_config import setup_logging
from mail_vsm.training.corpus import CorpusError
from mail_vsm.training.pipeline import train_from_file


# Setup logging
setup_logging()
logger = structlog.get_logger(__name__)

DEFAULT_OUTPUT = "models/trained_model.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Train a vector space model email classifier from a labeled corpus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Corpus format:
  [{"subject": "...", "sender": "...", "text": "...", "label": "Work"}, ...]
  ("body" is accepted in place of "text"; records with neither text nor
  subject are skipped)

Examples:
  %(prog)s training-corpus.json
  %(prog)s training-corpus.json --output models/trained_model.json --indent 0
        """,
    )

    parser.add_argument("corpus", type=str, help="Path to the training corpus JSON file")

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f"Model artifact output path (default: {DEFAULT_OUTPUT})",
    )

    parser.add_argument(
        "--min-doc-freq",
        type=int,
        default=None,
        help="Override the vocabulary pruning threshold",
    )

    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation of the artifact (default: 2, 0 for compact)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        outcome = train_from_file(args.corpus, min_doc_freq=args.min_doc_freq)
    except CorpusError as e:
        logger.error("training_failed", corpus=args.corpus, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output_path = save_artifact(outcome.artifact, Path(args.output), indent=args.indent or None)
    stats = outcome.stats

    print(f"Model saved to {output_path}", file=sys.stderr)
    print(f"File size: {output_path.stat().st_size / 1024:.2f} KB", file=sys.stderr)
    print(
        f"Records: {stats.documents} valid, {stats.skipped} skipped | "
        f"Vocabulary: {stats.vocabulary_size} terms (min doc freq {stats.min_doc_freq}) | "
        f"Categories: {len(stats.categories)} ({', '.join(stats.categories)})",
        file=sys.stderr,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
