import logging
import re
from dataclasses import asdict

logger = logging.getLogger(__name__)


def to_dict(obj):
    """
    Convert a dataclass object to a dictionary.

    Objects with their own to_dict() are converted with it, since asdict()
    does not know how to serialize nested pydantic models.

    Args:
        obj: The dataclass instance to convert.

    Returns:
        dict: Dictionary representation of the dataclass.
    """
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return asdict(obj)


def short_reason(reason: str) -> str:
    """
    Return up to two sentences from a reason string for concise logging.

    Args:
        reason: The reason string to summarize.

    Returns:
        str: Concise summary (max two sentences or 240 chars).
    """
    if not reason:
        logger.debug("No reason provided to short_reason")
        return "No reason provided"
    sentences = re.split(r"(?<=[.!?])\s+", reason.strip())
    joined = " ".join(sentences[:2]).strip()
    return joined or reason.strip()[:240]


def format_skill_list(skills: list[str]) -> str:
    """Join skill names the way they are embedded in prompts."""
    return ", ".join(skills)
