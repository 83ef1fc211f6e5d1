"""
Lookup Models

This package defines the data structures shared by the resolution workflow, the
presenters and the web application.

Key Models:
- result.py: Lookup requests, resolution results, the error taxonomy and the
  fixed set of text record keys fetched for every name
- health.py: Failure gauge backing the readiness probe

Nothing here is persisted. A ResolutionResult is built fresh for every lookup and
discarded once it has been rendered.
"""
