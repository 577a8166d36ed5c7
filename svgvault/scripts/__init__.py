"""Maintenance and benchmarking scripts."""
