"""Hiring portal backend: project submissions, manager/candidate chat, candidate analytics."""

__version__ = "1.0.0"
