"""Scheduler report readers."""
