"""
Error handling module for the BookSwap services.

Provides the exception taxonomy, relation-missing classification and
diagnostic logging.
"""

from .errors import (
    RELATION_MISSING_CODES,
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    MarketplaceError,
    NotAuthenticatedError,
    NotFoundError,
    RelationMissingError,
    RemoteError,
    is_relation_missing,
    parse_relation_name,
)
from .error_handler import ErrorHandler

__all__ = [
    'RELATION_MISSING_CODES',
    'AuthenticationError',
    'ConflictError',
    'ErrorHandler',
    'ForbiddenError',
    'InvalidInputError',
    'MarketplaceError',
    'NotAuthenticatedError',
    'NotFoundError',
    'RelationMissingError',
    'RemoteError',
    'is_relation_missing',
    'parse_relation_name',
]
