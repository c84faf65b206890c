"""Sync utilities shared by the matching code."""
