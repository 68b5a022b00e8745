"""Content Insight: social-content extraction and multi-provider AI analysis."""

__version__ = "0.1.0"
