"""Top-level package for the Daily Pulse news aggregator.

This package contains the command-line entrypoint and all supporting modules
for signing in, configuring topics and sources, generating a ranked news feed
through Gemini, and keeping a personal repository of archived stories.
"""

__all__ = []
