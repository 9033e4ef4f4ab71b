"""
GreenPlan Server - Invalid Token Error Exception

Raised by the token codec for any tampered, malformed or expired token.
Carries no detail about which check failed.
"""


class InvalidTokenError(Exception):
    """Exception for tokens that fail verification"""
    pass
