"""Data models for label derivation.

Defines the issue action enum, the ordered de-duplicating label collection
and the immutable decision returned to the caller.
"""

from enum import Enum
from typing import Iterable, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class IssueAction(str, Enum):
    """GitHub issue event action types.

    Attributes:
        OPENED: A new issue was created. Gets a welcome comment and labels.
        EDITED: An existing issue was modified. Labels are re-derived.
        OTHER: Any other action (closed, labeled, ...). Ignored.
    """

    OPENED = "opened"
    EDITED = "edited"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Optional[str]) -> "IssueAction":
        """Map a raw webhook action string to an IssueAction.

        Unknown or missing values map to OTHER.
        """
        if value in (cls.OPENED.value, cls.EDITED.value):
            return cls(value)
        return cls.OTHER


class LabelSet:
    """Ordered set of label names.

    Insertion order reflects detection order and a label is only stored
    once, no matter how many rules produce it.
    """

    def __init__(self, labels: Optional[Iterable[str]] = None) -> None:
        self._labels: List[str] = []
        for label in labels or ():
            self.add(label)

    def add(self, label: str) -> bool:
        """Append a label if it is not already present.

        Returns:
            bool: True if the label was added.
        """
        if label in self._labels:
            return False
        self._labels.append(label)
        return True

    def as_list(self) -> List[str]:
        return list(self._labels)

    def __contains__(self, label: object) -> bool:
        return label in self._labels

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __repr__(self) -> str:
        return f"LabelSet({self._labels!r})"


class LabelDecision(BaseModel):
    """Outcome of label derivation for a single issue event.

    Attributes:
        post_welcome: Whether the welcome comment should be posted.
        labels: Ordered, duplicate-free label names to apply.
    """

    model_config = ConfigDict(frozen=True)

    post_welcome: bool = Field(
        default=False,
        description="Whether the caller should post the welcome comment",
    )

    labels: List[str] = Field(
        default_factory=list,
        description="Ordered label names to apply (no duplicates)",
    )

    @property
    def has_labels(self) -> bool:
        return bool(self.labels)
