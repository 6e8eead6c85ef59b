"""Heuristic spam and phishing classification for single emails."""

__version__ = "0.1.0"
