"""treemirror - mirror a remote HTTP directory tree onto local storage."""

__version__ = "0.1.0"
