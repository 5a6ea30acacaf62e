"""Individual labeling rules.

Each rule adds its labels to a shared LabelSet so that ordering follows
detection order (title, then artifact ids line by line, then key phrases)
and a label is never applied twice.
"""

import logging
from typing import Iterable, Optional

from src.labeler.deriver.artifacts import MGMT_LABEL, is_mgmt_label, lookup_label
from src.labeler.deriver.extraction import iter_sdk_names
from src.labeler.deriver.models import LabelSet


logger = logging.getLogger(__name__)


FEATURE_REQUEST_LABEL = "feature-request"
BUG_LABEL = "bug"

# Evaluated in order, first match wins.
TITLE_KEYWORDS = (
    ("[feature request]", FEATURE_REQUEST_LABEL),
    ("[bug]", BUG_LABEL),
)

KEY_PHRASE_TRIGGERS = ("fluent", "manager", "management")

KEY_PHRASE_MIN_BODY_LENGTH = 100
KEY_PHRASE_MAX_BODY_LENGTH = 5120


def title_label(title: Optional[str]) -> Optional[str]:
    """Return the label implied by a bracketed title keyword, if any."""
    title_lower = (title or "").lower()
    for keyword, label in TITLE_KEYWORDS:
        if keyword in title_lower:
            return label
    return None


def add_artifact_labels(body: Optional[str], labels: LabelSet) -> LabelSet:
    """Add labels for every known SDK named in the body.

    Management-plane labels (``mgmt-*``) also add the ``mgmt`` label.

    Args:
        body: The issue body. May be None or empty.
        labels: Labels found so far; updated in place.

    Returns:
        The same LabelSet, for chaining.
    """
    for sdk_name in iter_sdk_names(body):
        label = lookup_label(sdk_name)
        if label is None or not labels.add(label):
            continue

        logger.info(
            "Adding label via artifact id",
            extra={"label": label, "artifact_id": sdk_name},
        )

        if is_mgmt_label(label):
            labels.add(MGMT_LABEL)

    return labels


def should_extract_key_phrases(body: Optional[str]) -> bool:
    """Only mid-sized bodies are sent to the key-phrase service."""
    length = len(body or "")
    return KEY_PHRASE_MIN_BODY_LENGTH < length < KEY_PHRASE_MAX_BODY_LENGTH


def key_phrase_label(phrase: str) -> Optional[str]:
    """Return ``mgmt`` if the phrase mentions a trigger word, else None."""
    phrase_lower = phrase.lower()
    if any(trigger in phrase_lower for trigger in KEY_PHRASE_TRIGGERS):
        return MGMT_LABEL
    return None


def add_key_phrase_labels(phrases: Iterable[str], labels: LabelSet) -> LabelSet:
    """Add labels implied by the key phrases of the issue body.

    Args:
        phrases: Key phrases returned by the text-analytics service.
        labels: Labels found so far; updated in place.

    Returns:
        The same LabelSet, for chaining.
    """
    for phrase in phrases:
        label = key_phrase_label(phrase)
        if label is not None and labels.add(label):
            logger.info(
                "Adding label via key phrase",
                extra={"label": label, "key_phrase": phrase},
            )
    return labels
