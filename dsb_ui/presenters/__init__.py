"""Presenters turning runner results into UI output."""
