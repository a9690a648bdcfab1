"""
Token hashing utilities.

Session tokens are stored as SHA-256 hashes, never in plain text.
"""

import hashlib


class TokenHasher:
    """
    Handles token hashing.
    """

    @staticmethod
    def hash_token(token: str) -> str:
        """
        Create SHA-256 hash of a token.

        Args:
            token: Plain token string

        Returns:
            Hex-encoded SHA-256 hash
        """
        return hashlib.sha256(token.encode()).hexdigest()
