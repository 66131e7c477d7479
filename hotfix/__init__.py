"""Automated hotfix workflow for GitHub repositories.

Creates a timestamped branch from trunk, commits pending changes, opens a pull
request, merges it (falling back to a manual merge in the browser), and returns
the working tree to an up-to-date trunk. Failures after the first mutating step
roll the working tree back to the original branch.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "1.0.3"
