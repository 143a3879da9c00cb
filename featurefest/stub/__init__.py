"""Local PostgREST-shaped stand-in for the hosted Featurefest backend.

Serves the same ``boards``, ``features``, ``features_with_votes`` and
``votes`` endpoints under ``/rest/v1`` from a SQLite database, so the SDK
can be exercised end to end without network access.
"""
