"""git-focus: rank what deserves attention in a GitHub account."""

__version__ = "0.1.0"
