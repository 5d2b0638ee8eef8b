"""Predictive career intelligence engine for the job portal."""
