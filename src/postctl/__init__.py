"""postctl: front-matter linting and queries for a blog content repository."""

__version__ = "0.3.0"
