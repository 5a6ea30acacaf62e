"""GitHub webhook handler for the issue labeler.

This module provides the WebhookHandler class for verifying and parsing
GitHub webhook deliveries. Only ``issues`` events are turned into
IssueEvent objects; the action decides later whether anything happens.

GitHub Webhook Payload Structure (issues event):
{
  "action": "opened",
  "issue": {
    "number": 123,
    "title": "Issue title",
    "body": "Issue body",
    "user": {"login": "username"}
  },
  "repository": {
    "name": "repo-name",
    "owner": {"login": "owner-name"}
  }
}
"""

import hashlib
import hmac
import logging
from typing import Any, Dict, Optional

from .models import ISSUES_EVENT, IssueAction, IssueEvent

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha256="


class WebhookHandler:
    """Handler for verifying and parsing GitHub webhook events.

    Attributes:
        secret: The webhook secret. When empty, signatures are not checked.
    """

    def __init__(self, secret: Optional[str] = None) -> None:
        self.secret = secret or ""

    def verify_signature(
        self,
        payload: bytes,
        signature_header: Optional[str],
    ) -> bool:
        """Verify the X-Hub-Signature-256 header of a delivery.

        Args:
            payload: The raw request body.
            signature_header: Value of the X-Hub-Signature-256 header.

        Returns:
            True if the signature matches or no secret is configured.
        """
        if not self.secret:
            return True

        if not signature_header or not signature_header.startswith(SIGNATURE_PREFIX):
            logger.warning("Missing or malformed webhook signature header")
            return False

        expected = hmac.new(
            self.secret.encode("utf-8"),
            payload,
            hashlib.sha256,
        ).hexdigest()
        received = signature_header[len(SIGNATURE_PREFIX):]

        if not hmac.compare_digest(expected, received):
            logger.warning("Webhook signature mismatch")
            return False
        return True

    def parse_issue_event(
        self,
        event_name: Optional[str],
        payload: Dict[str, Any],
    ) -> Optional[IssueEvent]:
        """Parse a GitHub issue event from a webhook payload.

        Args:
            event_name: Value of the X-GitHub-Event header.
            payload: The raw webhook payload as a dictionary.

        Returns:
            IssueEvent if parsing succeeds, None otherwise.
            Returns None for:
            - Events other than "issues"
            - Missing required fields
            - Malformed payload structure
        """
        if event_name != ISSUES_EVENT:
            logger.debug("Ignoring unsupported event type: %s", event_name)
            return None

        if not isinstance(payload, dict):
            logger.warning("Invalid payload: expected dict, got %s", type(payload))
            return None

        action_str = payload.get("action")
        if not isinstance(action_str, str):
            logger.warning("Missing or invalid 'action' field in payload")
            return None

        issue_data = payload.get("issue")
        if not isinstance(issue_data, dict):
            logger.warning(
                "Missing or invalid 'issue' field in payload: %s",
                type(issue_data),
            )
            return None

        repo_data = payload.get("repository")
        if not isinstance(repo_data, dict):
            logger.warning(
                "Missing or invalid 'repository' field in payload: %s",
                type(repo_data),
            )
            return None

        issue_number = issue_data.get("number")
        if (
            not isinstance(issue_number, int)
            or isinstance(issue_number, bool)
            or issue_number <= 0
        ):
            logger.warning("Invalid issue number: %s", issue_number)
            return None

        repo_name = repo_data.get("name")
        if not isinstance(repo_name, str) or not repo_name.strip():
            logger.warning("Invalid or empty repository name: %s", repo_name)
            return None

        owner = self._extract_user_login(repo_data.get("owner"))
        if owner is None:
            logger.warning("Missing or invalid repository owner")
            return None

        event = IssueEvent(
            action=IssueAction.parse(action_str),
            issue_number=issue_number,
            title=self._text_field(issue_data, "title"),
            body=self._text_field(issue_data, "body"),
            repository=repo_name.strip(),
            owner=owner,
            author=self._extract_user_login(issue_data.get("user")) or "",
        )

        logger.info(
            "Parsed issue event: action=%s, issue=%s",
            action_str,
            event.issue_id,
        )

        return event

    def _text_field(self, data: Dict[str, Any], name: str) -> str:
        # Title and body may be null in GitHub payloads
        value = data.get(name)
        if isinstance(value, str):
            return value
        if value is not None:
            logger.warning("Invalid issue %s type: %s", name, type(value))
        return ""

    def _extract_user_login(self, user_data: Any) -> Optional[str]:
        if not isinstance(user_data, dict):
            return None

        login = user_data.get("login")
        if not isinstance(login, str) or not login.strip():
            return None

        return login.strip()
