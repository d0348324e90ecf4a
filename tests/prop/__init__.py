"""
Property-based tests for the differential checks.

This package hosts Hypothesis strategies over the graph families and value
arrays, plus the test entrypoints for the fast CI lane and the nightly run.
"""
