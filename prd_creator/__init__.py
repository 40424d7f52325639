"""PRD Creator — Product Requirements Document tool server."""

__version__ = "0.1.0"
