"""Create posts, drafts and pages for a static site, and publish drafts."""

__version__ = '0.1.0'
