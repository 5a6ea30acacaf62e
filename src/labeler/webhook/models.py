"""GitHub webhook event models for the issue labeler.

The models use Pydantic for validation, consistent with the labeler's
configuration approach in config.py.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.labeler.deriver.models import IssueAction

ISSUES_EVENT = "issues"


class IssueEvent(BaseModel):
    """Parsed GitHub issue webhook event.

    Constructed fresh for every webhook delivery and never mutated.

    Attributes:
        action: The type of issue event (opened, edited, other).
        issue_number: The issue number within the repository.
        title: The issue title text.
        body: The issue body text. A null body is stored as "".
        repository: The repository name (without owner prefix).
        owner: The repository owner (user or organization).
        author: The GitHub username who created the issue.
    """

    model_config = ConfigDict(frozen=True)

    action: IssueAction = Field(
        ...,
        description="The type of issue event that triggered the webhook",
    )

    issue_number: int = Field(
        ...,
        gt=0,
        description="The issue number within the repository (positive integer)",
    )

    title: str = Field(
        default="",
        description="The issue title text",
    )

    body: str = Field(
        default="",
        description="The issue body/description text (may be empty)",
    )

    repository: str = Field(
        ...,
        min_length=1,
        description="The repository name without owner prefix",
    )

    owner: str = Field(
        ...,
        min_length=1,
        description="The repository owner (user or organization)",
    )

    author: str = Field(
        default="",
        description="The GitHub username who created the issue",
    )

    @property
    def issue_id(self) -> str:
        """Generate the canonical issue identifier.

        Returns:
            str: Issue ID in format "{owner}/{repository}#{issue_number}"
        """
        return f"{self.owner}/{self.repository}#{self.issue_number}"
