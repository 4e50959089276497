"""API middleware."""
from citelink.api.middleware.authentication import create_token_verifier, resolve_api_key

__all__ = ["create_token_verifier", "resolve_api_key"]
