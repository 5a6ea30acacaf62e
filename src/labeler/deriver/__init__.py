"""Rule-based label derivation.

This module decides which labels an issue gets from:
- Bracketed keywords in the title ([Bug], [Feature Request])
- SDK artifact ids named in the body
- Key phrases extracted from the body by the text-analytics service

It also decides whether the welcome comment should be posted.
"""

from src.labeler.deriver.artifacts import ARTIFACT_LABELS, MGMT_LABEL
from src.labeler.deriver.deriver import (
    KeyPhraseExtractor,
    LabelDeriver,
    derive_labels,
    should_label,
    should_post_welcome,
)
from src.labeler.deriver.models import IssueAction, LabelDecision, LabelSet

__all__ = [
    "ARTIFACT_LABELS",
    "IssueAction",
    "KeyPhraseExtractor",
    "LabelDecision",
    "LabelDeriver",
    "LabelSet",
    "MGMT_LABEL",
    "derive_labels",
    "should_label",
    "should_post_welcome",
]
