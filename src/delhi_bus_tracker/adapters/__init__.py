"""Adapters for the feed endpoint, reference files, publishing and HTTP."""
