"""Pytest configuration for all tests."""

import sys
import os

# Add the repository root to Python path so `src.labeler` is importable
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)
