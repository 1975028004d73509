"""Identity resolver adapters."""

from .factory import create_identity_resolver
from .resolvers import Auth0SubjectResolver, SessionSubjectResolver, UserIdResolver

__all__ = [
    "Auth0SubjectResolver",
    "SessionSubjectResolver",
    "UserIdResolver",
    "create_identity_resolver",
]
