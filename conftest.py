"""
Root conftest.py for the customer orders service.

Puts the repository root on sys.path so the customer_orders package
imports from a plain checkout, without an editable install.
"""

import sys
from pathlib import Path


def pytest_configure(config):
    """Add the repository root to sys.path."""
    root_dir = Path(__file__).parent
    if str(root_dir) not in sys.path:
        sys.path.insert(0, str(root_dir))
