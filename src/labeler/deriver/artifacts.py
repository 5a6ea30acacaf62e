"""Artifact id to label lookup table.

Maps the published name of a known SDK package to the label used for
triage. The table is built once at import time and is read-only.
"""

from types import MappingProxyType
from typing import Mapping, Optional

MGMT_LABEL = "mgmt"
MGMT_LABEL_PREFIX = "mgmt-"

ARTIFACT_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "azure-core": "azure-core",
        "azure-resourcemanager-resources": "mgmt-resources",
        "azure-resourcemanager-storage": "mgmt-storage",
        "azure-resourcemanager-compute": "mgmt-compute",
        "azure-resourcemanager-network": "mgmt-network",
    }
)


def lookup_label(
    artifact_id: str,
    table: Mapping[str, str] = ARTIFACT_LABELS,
) -> Optional[str]:
    """Return the label for an artifact id, or None for unknown ids."""
    return table.get(artifact_id)


def is_mgmt_label(label: str) -> bool:
    """Check whether a label belongs to a management-plane package."""
    return label.startswith(MGMT_LABEL_PREFIX)
