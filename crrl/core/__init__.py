"""
Core application flow.

The `RulesInstaller` decides where the rules come from (an explicit URL or a
directory picked from the repository), validates them, and hands them to the
storage layer.
"""

from .installer import InstallOutcome, InstallResult, RulesInstaller

__all__ = ["InstallOutcome", "InstallResult", "RulesInstaller"]
