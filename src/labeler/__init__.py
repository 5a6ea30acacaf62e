"""Rule-based GitHub issue labeler.

This package implements a webhook-driven issue triager, providing:
- GitHub webhook parsing for issues.opened / issues.edited events
- Label derivation from issue titles, SDK artifact ids and key phrases
- Azure Text Analytics key-phrase extraction
- Welcome comments and label application through the GitHub API
"""
