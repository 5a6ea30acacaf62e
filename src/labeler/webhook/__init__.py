"""GitHub webhook handling for the issue labeler.

This module verifies and parses GitHub webhook deliveries for the
``issues`` event. The labeler acts on these actions:
- issues.opened - New issue created (welcome comment and labels)
- issues.edited - Issue content updated (labels)
"""

from .handler import WebhookHandler
from .models import IssueAction, IssueEvent

__all__ = [
    "IssueAction",
    "IssueEvent",
    "WebhookHandler",
]
