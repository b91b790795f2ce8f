"""
Application Layer for the FitTrack API.

This package contains:
- ports/: Abstract repository and webhook interfaces
- use_cases/: Workflows coordinating ports and domain models
- exceptions: Errors carrying their HTTP status
"""
