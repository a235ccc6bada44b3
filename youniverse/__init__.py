"""Youniverse: student networking API."""
