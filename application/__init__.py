"""
Application Layer for the workout editor.

This package contains:
- ports/: Abstract service interfaces (what the application needs)
- use_cases/: Workflows over the pure domain services
- session.py: WorkoutSession store for interactive editing
"""
