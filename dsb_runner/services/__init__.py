"""Collaborators around the engine: environment, volumes, reports."""
