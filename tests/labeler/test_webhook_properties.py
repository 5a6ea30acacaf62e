"""Property-based tests for GitHub webhook verification and parsing.

This module uses Hypothesis to verify that the webhook handler parses
GitHub issue events across generated payloads, guards null bodies, maps
unknown actions to OTHER and checks delivery signatures.

Testing Configuration:
- Library: Hypothesis (Python)
- Minimum iterations: 100 per property test
"""

import hashlib
import hmac

from hypothesis import given, settings, strategies as st

from src.labeler.webhook import IssueAction, IssueEvent, WebhookHandler


# =============================================================================
# Hypothesis Strategies for Generating Valid GitHub Payloads
# =============================================================================


@st.composite
def valid_github_username(draw: st.DrawFn) -> str:
    """Generate a valid GitHub username.

    GitHub usernames:
    - Can contain alphanumeric characters and hyphens
    - Cannot start or end with a hyphen
    - Cannot have consecutive hyphens
    - Are 1-39 characters long
    """
    return draw(
        st.text(
            alphabet=st.sampled_from(
                "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-"
            ),
            min_size=1,
            max_size=39,
        ).filter(
            lambda x: (
                x.strip()
                and not x.startswith("-")
                and not x.endswith("-")
                and "--" not in x
            )
        )
    )


@st.composite
def valid_repo_name(draw: st.DrawFn) -> str:
    """Generate a valid GitHub repository name."""
    return draw(
        st.text(
            alphabet=st.sampled_from(
                "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_."
            ),
            min_size=1,
            max_size=100,
        ).filter(lambda x: x.strip() and not x.startswith("."))
    )


@st.composite
def github_issue_payload(
    draw: st.DrawFn,
    actions=("opened", "edited"),
    body=st.one_of(st.none(), st.text(max_size=10000)),
) -> dict:
    """Generate a GitHub issues webhook payload."""
    return {
        "action": draw(st.sampled_from(actions)),
        "issue": {
            "number": draw(st.integers(min_value=1, max_value=1000000)),
            "title": draw(st.text(min_size=1, max_size=200)),
            "body": draw(body),
            "user": {"login": draw(valid_github_username())},
        },
        "repository": {
            "name": draw(valid_repo_name()),
            "owner": {"login": draw(valid_github_username())},
        },
    }


# =============================================================================
# Property Tests
# =============================================================================


class TestIssueEventParsing:
    """*For any* issues payload, the handler produces an IssueEvent whose
    fields match the payload."""

    @given(payload=github_issue_payload())
    @settings(max_examples=100)
    def test_valid_payload_parses_successfully(self, payload: dict) -> None:
        result = WebhookHandler().parse_issue_event("issues", payload)

        assert isinstance(result, IssueEvent)
        assert result.action.value == payload["action"]
        assert result.issue_number == payload["issue"]["number"]
        assert result.title == payload["issue"]["title"]
        assert result.repository == payload["repository"]["name"].strip()
        assert result.owner == payload["repository"]["owner"]["login"]
        assert result.author == payload["issue"]["user"]["login"]

    @given(payload=github_issue_payload())
    @settings(max_examples=100)
    def test_body_is_never_none(self, payload: dict) -> None:
        result = WebhookHandler().parse_issue_event("issues", payload)

        assert result is not None
        expected_body = payload["issue"]["body"]
        if expected_body is None:
            expected_body = ""
        assert result.body == expected_body

    @given(
        payload=github_issue_payload(
            actions=("closed", "reopened", "labeled", "assigned", "deleted"),
        )
    )
    @settings(max_examples=100)
    def test_other_actions_map_to_other(self, payload: dict) -> None:
        result = WebhookHandler().parse_issue_event("issues", payload)

        assert result is not None
        assert result.action == IssueAction.OTHER

    @given(
        event_name=st.sampled_from(
            ["issue_comment", "pull_request", "push", "ping", "", None]
        ),
        payload=github_issue_payload(),
    )
    @settings(max_examples=100)
    def test_non_issue_events_are_ignored(self, event_name, payload: dict) -> None:
        assert WebhookHandler().parse_issue_event(event_name, payload) is None

    @given(payload=github_issue_payload())
    @settings(max_examples=100)
    def test_issue_id_format(self, payload: dict) -> None:
        result = WebhookHandler().parse_issue_event("issues", payload)

        assert result is not None
        assert result.issue_id == (
            f"{payload['repository']['owner']['login']}/"
            f"{payload['repository']['name'].strip()}#{payload['issue']['number']}"
        )


class TestMalformedPayloads:

    def _payload(self) -> dict:
        return {
            "action": "opened",
            "issue": {"number": 1, "title": "t", "body": "b", "user": {"login": "u"}},
            "repository": {"name": "r", "owner": {"login": "o"}},
        }

    def test_not_a_dict(self):
        assert WebhookHandler().parse_issue_event("issues", ["opened"]) is None

    def test_missing_action(self):
        payload = self._payload()
        del payload["action"]
        assert WebhookHandler().parse_issue_event("issues", payload) is None

    def test_missing_issue(self):
        payload = self._payload()
        del payload["issue"]
        assert WebhookHandler().parse_issue_event("issues", payload) is None

    def test_invalid_issue_number(self):
        for number in (0, -3, "12", None, True):
            payload = self._payload()
            payload["issue"]["number"] = number
            assert WebhookHandler().parse_issue_event("issues", payload) is None

    def test_missing_owner(self):
        payload = self._payload()
        payload["repository"]["owner"] = None
        assert WebhookHandler().parse_issue_event("issues", payload) is None

    def test_null_title_and_body(self):
        payload = self._payload()
        payload["issue"]["title"] = None
        payload["issue"]["body"] = None

        result = WebhookHandler().parse_issue_event("issues", payload)

        assert result is not None
        assert result.title == ""
        assert result.body == ""

    def test_non_string_body(self):
        payload = self._payload()
        payload["issue"]["body"] = {"unexpected": True}

        result = WebhookHandler().parse_issue_event("issues", payload)

        assert result is not None
        assert result.body == ""

    def test_missing_author_is_tolerated(self):
        payload = self._payload()
        del payload["issue"]["user"]

        result = WebhookHandler().parse_issue_event("issues", payload)

        assert result is not None
        assert result.author == ""


class TestSignatureVerification:

    @staticmethod
    def _sign(secret: str, payload: bytes) -> str:
        digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256)
        return "sha256=" + digest.hexdigest()

    @given(secret=st.text(min_size=1, max_size=64), payload=st.binary(max_size=2048))
    @settings(max_examples=100)
    def test_valid_signature_accepted(self, secret: str, payload: bytes) -> None:
        handler = WebhookHandler(secret=secret)
        assert handler.verify_signature(payload, self._sign(secret, payload))

    @given(payload=st.binary(min_size=1, max_size=2048))
    @settings(max_examples=100)
    def test_wrong_secret_rejected(self, payload: bytes) -> None:
        handler = WebhookHandler(secret="right-secret")
        assert not handler.verify_signature(payload, self._sign("wrong-secret", payload))

    def test_missing_header_rejected(self):
        handler = WebhookHandler(secret="s3cret")
        assert not handler.verify_signature(b"{}", None)
        assert not handler.verify_signature(b"{}", "sha1=abc")

    def test_no_secret_accepts_everything(self):
        handler = WebhookHandler()
        assert handler.verify_signature(b"{}", None)
