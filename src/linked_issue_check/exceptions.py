"""
Custom exceptions used across Linked-Issue Check.
"""


class LinkedIssueCheckError(RuntimeError):
    """Base class for errors raised by Linked-Issue Check."""

    pass


class GraphQLQueryError(LinkedIssueCheckError):
    """Raised when a GraphQL response carries an ``errors`` payload or has an unexpected shape.

    The detector treats this like any other query failure and switches to the
    timeline fallback.
    """

    pass


class PullRequestContextError(LinkedIssueCheckError):
    """Raised when the repository or pull request number cannot be determined."""

    pass
