"""
Test suite for content-tuner.

Provides tests for all modules:
- Unit tests for DOM helpers, clustering, the pipeline and the metric
- Tuning and annealing tests with seeded randomness
- CLI tests through Typer's test runner
"""
