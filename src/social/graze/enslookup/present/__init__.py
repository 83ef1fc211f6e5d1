"""
Presentation

Formatting for ENS lookup results. Everything in this package consumes a
ResolutionResult and produces text or user actions; nothing here talks to the
network.

Key Components:
- markdown.py: Markdown detail view, one line summaries, profile links and the
  copy/open actions offered for a result
- templates/: Jinja2 templates used by the markdown renderer
"""
