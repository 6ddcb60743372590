"""Core utilities and shared infrastructure.

- config: Evaluator configuration loading and validation
- constants: Coordinate bounds, unit conversion factors, ring limits
- exceptions: Custom exception hierarchy
"""
