"""
Sender heuristic for low-confidence classifications.

When no centroid is meaningfully similar, the argmax is noise; a sender that
looks like a bulk mailer goes to Promotion and everything else to Work.
"""

from typing import Iterable, Optional

from ..config import settings
from ..models.labels import EmailLabel


def fallback_label(sender: str, markers: Optional[Iterable[str]] = None) -> str:
    """
    Label a message from its sender alone.

    Args:
        sender: Raw sender string (address or display name)
        markers: Substrings marking bulk senders (default: settings)

    Examples:
        >>> fallback_label("newsletter@x.com")
        'Promotion'
        >>> fallback_label("random@x.com")
        'Work'
    """
    if markers is None:
        markers = settings.promotion_markers

    sender_lower = sender.lower() if isinstance(sender, str) else ""
    if any(marker in sender_lower for marker in markers):
        return EmailLabel.PROMOTION.value
    return EmailLabel.WORK.value
