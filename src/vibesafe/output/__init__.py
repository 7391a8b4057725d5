"""Reporters — Markdown text report, Rich terminal table, JSON."""
