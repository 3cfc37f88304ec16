"""
jobly.auth

Authentication/authorization package.

Responsibilities:
- Password hashing and signed bearer tokens.
- Request gate that resolves the caller (or leaves it anonymous).
- Guards that permit or deny a route based on the resolved caller.
"""

# Package marker.
