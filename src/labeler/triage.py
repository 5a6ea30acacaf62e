"""Issue triage connecting label derivation to the GitHub API.

Receives parsed webhook events, asks the LabelDeriver for a decision and
carries it out: the welcome comment for new issues and the derived labels
when there are any. A failed GitHub mutation is logged and does not stop
the other mutation.

Source:
- src/labeler/webhook/models.py (IssueEvent)
- src/labeler/deriver/deriver.py (LabelDeriver)
- src/labeler/github/client.py (GitHubClient)
"""

import logging

from src.labeler.config import DEFAULT_WELCOME_MESSAGE
from src.labeler.deriver.deriver import LabelDeriver
from src.labeler.deriver.models import LabelDecision
from src.labeler.github.client import GitHubAPIError, GitHubClient
from src.labeler.webhook.models import IssueEvent

logger = logging.getLogger(__name__)


class IssueTriager:
    """Applies welcome comments and derived labels to GitHub issues.

    Attributes:
        deriver: Decides the welcome comment and labels.
        github_client: GitHub API client for comments and labels.
        welcome_message: Body of the welcome comment.
    """

    def __init__(
        self,
        deriver: LabelDeriver,
        github_client: GitHubClient,
        welcome_message: str = DEFAULT_WELCOME_MESSAGE,
    ):
        self.deriver = deriver
        self.github_client = github_client
        self.welcome_message = welcome_message

    async def handle(self, event: IssueEvent) -> LabelDecision:
        """Triage a single issue event.

        Args:
            event: Parsed GitHub issue webhook event.

        Returns:
            The LabelDecision that was carried out.
        """
        issue_id = event.issue_id

        logger.info(
            "Triaging issue",
            extra={"issue_id": issue_id, "action": event.action.value},
        )

        decision = await self.deriver.derive(event.action, event.title, event.body)

        if decision.post_welcome:
            await self._post_welcome(event)

        if decision.has_labels:
            await self._apply_labels(event, decision)

        logger.info(
            "Issue triaged",
            extra={
                "issue_id": issue_id,
                "post_welcome": decision.post_welcome,
                "labels": decision.labels,
            },
        )

        return decision

    async def _post_welcome(self, event: IssueEvent) -> None:
        try:
            await self.github_client.create_comment(
                event.owner,
                event.repository,
                event.issue_number,
                self.welcome_message,
            )
        except GitHubAPIError as e:
            logger.error(
                "Failed to post welcome comment",
                extra={
                    "issue_id": event.issue_id,
                    "error": e.message,
                    "status_code": e.status_code,
                },
            )

    async def _apply_labels(self, event: IssueEvent, decision: LabelDecision) -> None:
        try:
            await self.github_client.add_labels(
                event.owner,
                event.repository,
                event.issue_number,
                decision.labels,
            )
        except GitHubAPIError as e:
            logger.error(
                "Failed to apply labels",
                extra={
                    "issue_id": event.issue_id,
                    "labels": decision.labels,
                    "error": e.message,
                    "status_code": e.status_code,
                },
            )
