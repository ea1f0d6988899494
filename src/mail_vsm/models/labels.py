"""
Known email categories.

Labels are open strings throughout the classifier (a corpus may introduce new
ones); this enum names the categories the mail client ships with.
"""

from enum import Enum


class EmailLabel(str, Enum):
    """Email categories used by the mail client."""

    WORK = "Work"
    PERSONAL = "Personal"
    PROMOTION = "Promotion"
    SOCIAL = "Social"
    SPAM = "Spam"
    PHISHING = "Phishing"
    GAME = "Game"
    EDUCATION = "Education"
