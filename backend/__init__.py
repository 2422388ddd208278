"""Lessonbook backend."""
