"""
Classify Authentication Package

Self-issued bearer tokens: TokenCodec signs and verifies credentials, AuthGate
turns request headers into a subject id, BearerTokenAuthentication wires the
gate into Django REST Framework.
"""

from .token_codec import Credential, TokenCodec, get_token_codec
from .gate import AuthGate, extract_bearer_token
