"""postcraft - structured blog drafts to validated HTML."""

__version__ = "0.1.0"
