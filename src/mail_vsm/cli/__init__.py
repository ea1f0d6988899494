"""
CLI module for the VSM classifier.

Provides command-line tools for offline training and batch classification.
"""

from mail_vsm.cli.train import main as train_main
from mail_vsm.cli.classify import main as classify_main

__all__ = ["train_main", "classify_main"]
