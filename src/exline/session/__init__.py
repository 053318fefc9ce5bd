"""Completion and history cycling sessions."""
