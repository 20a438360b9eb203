"""
Error handler for the marketplace services.

Logs failures with diagnostic context and turns them into actionable
recovery suggestions.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from bookswap.error_handling.errors import (
    AuthenticationError,
    RelationMissingError,
    RemoteError,
)
from bookswap.remote.schema import group_for_relation


# Configure logging
logger = logging.getLogger(__name__)


class ErrorHandler:
    """
    Diagnostic logging and recovery suggestions for service failures.

    The handler never retries or swallows anything: callers log through it
    and then recover via fallback or re-raise.
    """

    def log_error(
        self,
        operation: str,
        error: BaseException,
        **context: Any
    ) -> None:
        """
        Log error with timestamp, context, and diagnostic data.

        Args:
            operation: Name of the operation that failed
            error: The exception that occurred
            **context: Operation arguments worth recording
        """
        full_context = {
            'timestamp': datetime.now().isoformat(),
            'operation': operation,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'context': {k: str(v) for k, v in context.items()},
        }
        code = getattr(error, 'code', None)
        if code:
            full_context['code'] = code

        logger.error(
            f"Operation failed: {operation} | "
            f"Error: {type(error).__name__}: {str(error)}"
        )
        logger.debug(f"Full error context: {full_context}")

    def recovery_suggestions(self, error: BaseException) -> Dict[str, Any]:
        """
        Provide recovery suggestions for a service failure.

        Args:
            error: The exception to analyze

        Returns:
            Dictionary with error analysis and recovery suggestions
        """
        suggestions: Dict[str, Any] = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'timestamp': datetime.now().isoformat(),
            'recovery_suggestions': []
        }

        if isinstance(error, RelationMissingError):
            table_group = group_for_relation(error.relation)
            if table_group:
                group = table_group.value
                suggestions['recovery_suggestions'].extend([
                    f"Create the missing '{error.relation}' table",
                    f"Run the '{group}' schema (print it with: bookswap schema {group})",
                    'Serving fixture data until the process restarts',
                ])
            else:
                suggestions['recovery_suggestions'].extend([
                    'Run bookswap diagnose to find the missing tables',
                    'Serving fixture data until the process restarts',
                ])
        elif isinstance(error, AuthenticationError):
            suggestions['recovery_suggestions'].extend([
                'Sign in again; the session may be missing or expired',
                'Verify the email and password',
            ])
        elif isinstance(error, RemoteError) and error.status is None:
            suggestions['recovery_suggestions'].extend([
                'Check network connectivity to the backend',
                'Verify SUPABASE_URL points at a running project',
            ])
        elif isinstance(error, RemoteError):
            suggestions['recovery_suggestions'].extend([
                'Verify SUPABASE_ANON_KEY is set and valid',
                'Check the row-level security policies for the table',
            ])
        else:
            suggestions['recovery_suggestions'].append('Inspect the logged error context')

        return suggestions

    def log_fallback(
        self,
        operation: str,
        error: RelationMissingError,
        group: Optional[str] = None
    ) -> None:
        """Log that a table group switched to fixture data."""
        relation = error.relation or 'unknown relation'
        logger.warning(
            f"{relation} table does not exist, falling back to fixture data "
            f"for {group or 'this service'} (operation: {operation})"
        )
        logger.info(f"Recovery suggestions: {self.recovery_suggestions(error)['recovery_suggestions']}")
