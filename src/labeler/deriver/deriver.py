"""Label derivation for GitHub issue events.

This module combines the labeling rules into the decision returned to the
event handler:

1. Welcome comment only for ``opened`` issues.
2. Labeling only for ``opened`` and ``edited`` issues.
3. Title keyword rule.
4. Artifact id rule over the first 256 body lines.
5. Key-phrase rule for mid-sized bodies (async, optional).

Steps 1-4 are pure and synchronous (``derive_labels``). Step 5 needs the
text-analytics service and runs in ``LabelDeriver.derive``. Failure of the
service only drops the key-phrase contribution.

Source:
- src/labeler/deriver/rules.py (individual rules)
- src/labeler/analytics/client.py (TextAnalyticsClient)
"""

import logging
from typing import List, Optional, Protocol, runtime_checkable

from src.labeler.analytics.client import TextAnalyticsError
from src.labeler.deriver.models import IssueAction, LabelDecision, LabelSet
from src.labeler.deriver.rules import (
    add_artifact_labels,
    add_key_phrase_labels,
    should_extract_key_phrases,
    title_label,
)


logger = logging.getLogger(__name__)


@runtime_checkable
class KeyPhraseExtractor(Protocol):
    """Interface of the key-phrase service used by the deriver."""

    async def extract_key_phrases(self, text: str) -> List[str]:
        """Return the key phrases of a single English document.

        Raises:
            TextAnalyticsError: If the service cannot produce phrases.
        """
        ...


def should_post_welcome(action: IssueAction) -> bool:
    return action == IssueAction.OPENED


def should_label(action: IssueAction) -> bool:
    return action in (IssueAction.OPENED, IssueAction.EDITED)


def _derive_label_set(
    action: IssueAction,
    title: Optional[str],
    body: Optional[str],
) -> LabelSet:
    labels = LabelSet()
    if not should_label(action):
        return labels

    label = title_label(title)
    if label is not None:
        labels.add(label)
        logger.info("Adding label via title", extra={"label": label})

    return add_artifact_labels(body, labels)


def derive_labels(
    action: IssueAction,
    title: Optional[str],
    body: Optional[str],
) -> LabelDecision:
    """Derive the welcome decision and rule-based labels for an issue.

    Covers everything except the key-phrase rule.

    Args:
        action: The issue event action.
        title: The issue title.
        body: The issue body. None is treated as empty.

    Returns:
        LabelDecision with the welcome flag and ordered labels.
    """
    return LabelDecision(
        post_welcome=should_post_welcome(action),
        labels=_derive_label_set(action, title, body).as_list(),
    )


class LabelDeriver:
    """Derives labels for an issue, including key-phrase labels.

    Attributes:
        key_phrase_extractor: Service used for the key-phrase rule. When
            None the key-phrase rule is skipped.

    Example:
        >>> deriver = LabelDeriver(key_phrase_extractor=analytics_client)
        >>> decision = await deriver.derive(
        ...     IssueAction.OPENED,
        ...     title="[BUG] upload fails",
        ...     body="Library used: azure-resourcemanager-storage 2.0.0",
        ... )
        >>> decision.labels
        ['bug', 'mgmt-storage', 'mgmt']
    """

    def __init__(
        self,
        key_phrase_extractor: Optional[KeyPhraseExtractor] = None,
    ):
        self.key_phrase_extractor = key_phrase_extractor

    async def derive(
        self,
        action: IssueAction,
        title: Optional[str],
        body: Optional[str],
    ) -> LabelDecision:
        """Derive the full label decision for an issue event.

        Args:
            action: The issue event action.
            title: The issue title.
            body: The issue body. None is treated as empty.

        Returns:
            LabelDecision with the welcome flag and ordered labels.
        """
        labels = _derive_label_set(action, title, body)

        if should_label(action):
            await self._add_key_phrase_labels(body or "", labels)

        return LabelDecision(
            post_welcome=should_post_welcome(action),
            labels=labels.as_list(),
        )

    async def _add_key_phrase_labels(self, body: str, labels: LabelSet) -> None:
        if self.key_phrase_extractor is None:
            return

        if not should_extract_key_phrases(body):
            return

        try:
            phrases = await self.key_phrase_extractor.extract_key_phrases(body)
        except TextAnalyticsError as e:
            logger.warning(
                "Key-phrase extraction failed, skipping key-phrase labels",
                extra={
                    "error": e.message,
                    "status_code": e.status_code,
                },
            )
            return

        add_key_phrase_labels(phrases, labels)
