"""
jobly.services

Service layer.

Responsibilities:
- Account rules that combine persistence with credential hashing and tokens.
"""

# Package marker.
