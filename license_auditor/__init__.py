"""License auditor - third-party license reports for build dependencies."""

__version__ = "0.1.0"
