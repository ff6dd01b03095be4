"""Runnable demo that decodes sample session cookies."""
