"""FastAPI application entry point for the issue labeler.

This module provides the main FastAPI application. It receives GitHub
webhooks, verifies them and hands issue events to the IssueTriager, which
runs after the webhook has been acknowledged.
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import BackgroundTasks, FastAPI, HTTPException, Request

from .analytics.client import TextAnalyticsClient
from .config import LabelerSettings, get_settings
from .deriver.deriver import LabelDeriver
from .github.client import GitHubClient
from .triage import IssueTriager
from .webhook.handler import WebhookHandler

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Global instances, initialized during lifespan startup
settings: LabelerSettings
triager: Optional[IssueTriager] = None
webhook_handler: Optional[WebhookHandler] = None
github_client: Optional[GitHubClient] = None
text_analytics_client: Optional[TextAnalyticsClient] = None


def _redact_secret(value: str, visible_chars: int = 4) -> str:
    """Redact a secret value, showing only the first few characters.

    Args:
        value: The secret value to redact.
        visible_chars: Number of characters to show at the start.

    Returns:
        Redacted string with asterisks replacing hidden characters.
    """
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def _log_configuration(settings: LabelerSettings) -> None:
    """Log configuration values with secrets redacted."""
    logger.info("Labeler configuration:")
    logger.info(f"  GitHub Base URL: {settings.github_base_url}")
    logger.info(f"  GitHub Token: {_redact_secret(settings.github_token)}")
    logger.info(f"  Webhook Secret: {_redact_secret(settings.webhook_secret)}")
    logger.info(f"  Text Analytics Endpoint: {settings.text_analytics_endpoint}")
    logger.info(
        f"  Text Analytics Key: {_redact_secret(settings.text_analytics_key)}"
    )
    logger.info(f"  Text Analytics Timeout: {settings.text_analytics_timeout}")
    logger.info(f"  Key Phrases Enabled: {settings.key_phrases_enabled}")
    logger.info(f"  Host: {settings.host}")
    logger.info(f"  Port: {settings.port}")


def _build_triager(
    cfg: LabelerSettings,
    gh_client: GitHubClient,
    analytics_client: Optional[TextAnalyticsClient],
) -> IssueTriager:
    """Wire the label deriver and GitHub client into an IssueTriager."""
    deriver = LabelDeriver(key_phrase_extractor=analytics_client)
    return IssueTriager(
        deriver=deriver,
        github_client=gh_client,
        welcome_message=cfg.welcome_message,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    global settings, triager, webhook_handler, github_client, text_analytics_client

    logger.info("Issue labeler starting up...")

    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)
    _log_configuration(settings)

    webhook_handler = WebhookHandler(secret=settings.webhook_secret)
    github_client = GitHubClient(
        token=settings.github_token,
        base_url=settings.github_base_url,
    )

    if settings.key_phrases_enabled:
        text_analytics_client = TextAnalyticsClient(
            endpoint=settings.text_analytics_endpoint,
            subscription_key=settings.text_analytics_key,
            timeout=settings.text_analytics_timeout,
        )
    else:
        logger.warning(
            "Text Analytics is not configured, key-phrase labels are disabled"
        )

    triager = _build_triager(settings, github_client, text_analytics_client)

    logger.info("Issue labeler started successfully")

    yield

    logger.info("Issue labeler shutting down...")

    if github_client is not None:
        await github_client.close()
    if text_analytics_client is not None:
        await text_analytics_client.close()

    logger.info("Issue labeler shutdown complete")


app = FastAPI(
    title="Issue Labeler",
    description="Welcome comments and rule-based labels for GitHub issues",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health():
    """Liveness probe endpoint."""
    return {"status": "healthy"}


@app.post("/webhooks/github")
async def github_webhook(request: Request, background_tasks: BackgroundTasks):
    """GitHub webhook receiver endpoint.

    Verifies the delivery signature, parses issue events and schedules
    triage after the response has been sent.

    Returns:
        dict: Acknowledgment of webhook receipt.

    Raises:
        HTTPException: 401 on a bad signature, 400 on a non-JSON body.
    """
    if webhook_handler is None or triager is None:
        logger.error("Labeler not initialized")
        return {"status": "error", "message": "Labeler not initialized"}

    raw_body = await request.body()
    if not webhook_handler.verify_signature(
        raw_body, request.headers.get("X-Hub-Signature-256")
    ):
        raise HTTPException(status_code=401, detail="Invalid webhook signature")

    try:
        payload = json.loads(raw_body)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON payload")

    event = webhook_handler.parse_issue_event(
        request.headers.get("X-GitHub-Event"), payload
    )
    if event is None:
        return {"status": "ignored", "message": "Unsupported or invalid event"}

    background_tasks.add_task(triager.handle, event)

    return {"status": "accepted", "issue_id": event.issue_id}


if __name__ == "__main__":
    import uvicorn

    dev_settings = get_settings()
    uvicorn.run(
        "src.labeler.main:app",
        host=dev_settings.host,
        port=dev_settings.port,
    )
