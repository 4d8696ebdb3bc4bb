"""
GitHub API client for Linked-Issue Check.
"""

import threading
from typing import Any, Dict, List, Optional

import httpx
from github import Auth, Github, Repository
from github.GithubException import GithubException

from .config import settings
from .exceptions import GraphQLQueryError
from .logger_config import get_logger
from .models import ClosingIssue, ClosingIssuesResult, PullRequestContext, TimelineEvent

logger = get_logger(__name__)

CLOSING_ISSUES_QUERY = """
query($owner: String!, $repo: String!, $number: Int!, $limit: Int!) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $number) {
      closingIssuesReferences(first: $limit) {
        nodes {
          number
          title
        }
      }
    }
  }
}
"""


class GitHubClient:
    """GitHub API client for reading pull requests and posting comments.

    REST calls go through PyGithub; GraphQL queries are posted with httpx.

    Usage Pattern:
    -------------
    1. First call: Provide token
       ```python
       from linked_issue_check.github_client import GitHubClient

       client = GitHubClient.get_instance("your-token")
       ```

    2. Subsequent calls return the same instance; parameters are ignored.

    Use reset_singleton() in tests to clear the instance.
    """

    _instance: Optional["GitHubClient"] = None
    _lock = threading.Lock()

    def __init__(
        self,
        token: str,
        api_url: Optional[str] = None,
        graphql_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize GitHub client with API token.

        Args:
            token: GitHub API token
            api_url: REST API base URL (defaults to settings.github_api_url)
            graphql_url: GraphQL endpoint (defaults to settings.github_graphql_url)
            timeout: Request timeout in seconds (defaults to settings.request_timeout)
            http_client: Optional httpx client used for GraphQL requests
        """
        self.token = token
        self.api_url = api_url or settings.github_api_url
        self.graphql_url = graphql_url or settings.github_graphql_url
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.github = Github(auth=Auth.Token(token), base_url=self.api_url, timeout=self.timeout)
        self._http_client = http_client

    @classmethod
    def get_instance(cls, token: Optional[str] = None) -> "GitHubClient":
        """Get the singleton instance of GitHubClient.

        Args:
            token: GitHub API token (used only for first call)

        Returns:
            The singleton instance of GitHubClient
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    if token is None:
                        raise ValueError("GitHub token is required on first call to get_instance()")
                    cls._instance = cls(token)
        return cls._instance

    @classmethod
    def reset_singleton(cls) -> None:
        """Reset the singleton instance."""
        with cls._lock:
            cls._instance = None

    def _get_http_client(self) -> httpx.Client:
        if self._http_client is None:
            self._http_client = httpx.Client(timeout=self.timeout)
        return self._http_client

    def graphql_query(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Executes a GraphQL query against the GitHub API.

        Args:
            query: The GraphQL query string.
            variables: A dictionary of variables for the query.

        Returns:
            The JSON response from the API as a dictionary.

        Raises:
            httpx.HTTPError: On transport failures or a non-2xx status code.
            GraphQLQueryError: If the response contains GraphQL errors.
        """
        headers = {
            "Authorization": f"bearer {self.token}",
            "Content-Type": "application/json",
        }
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = self._get_http_client().post(self.graphql_url, headers=headers, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"GraphQL query failed with HTTP status {e.response.status_code}: {e.response.text}")
            raise

        if not isinstance(data, dict):
            raise GraphQLQueryError("GraphQL response is not a JSON object")

        if data.get("errors"):
            error_messages = [err.get("message", "Unknown error") for err in data["errors"]]
            logger.error(f"GraphQL query failed with errors: {', '.join(error_messages)}")
            raise GraphQLQueryError(f"GraphQL query failed: {', '.join(error_messages)}")

        return data

    def get_repository(self, repo_name: str) -> Repository.Repository:
        """Get repository object by name (owner/repo)."""
        try:
            return self.github.get_repo(repo_name)
        except GithubException as e:
            logger.error(f"Failed to get repository {repo_name}: {e}")
            raise

    def get_pull_request_context(self, repo_name: str, pr_number: int) -> PullRequestContext:
        """Fetch the current title and body of a pull request.

        The event payload can be stale for ``edited`` events, so the PR is read again.
        """
        try:
            repo = self.get_repository(repo_name)
            pr = repo.get_pull(pr_number)
        except GithubException as e:
            logger.error(f"Failed to get PR #{pr_number} in {repo_name}: {e}")
            raise

        return PullRequestContext.from_repo_name(repo_name, pr_number, title=pr.title, body=pr.body)

    def get_pr_closing_issues(self, repo_name: str, pr_number: int, limit: Optional[int] = None) -> ClosingIssuesResult:
        """Get issues that will be closed when the PR is merged, using the GraphQL API.

        Never raises: any failure is logged and returned as a failed result so the
        caller can choose another data source.

        Args:
            repo_name: Repository name in format 'owner/repo'
            pr_number: PR number to check for closing issues
            limit: Maximum number of closing issues to request

        Returns:
            ClosingIssuesResult with the issues, or the error message on failure.
        """
        try:
            owner, repo = repo_name.split("/")
            variables = {
                "owner": owner,
                "repo": repo,
                "number": pr_number,
                "limit": limit if limit is not None else settings.closing_issues_limit,
            }
            data = self.graphql_query(CLOSING_ISSUES_QUERY, variables)

            repository = (data.get("data") or {}).get("repository") or {}
            pull_request = repository.get("pullRequest")
            if pull_request is None:
                raise GraphQLQueryError(f"Pull request #{pr_number} not found in GraphQL response")
            nodes = pull_request["closingIssuesReferences"]["nodes"]

            issues = [ClosingIssue(number=int(node["number"]), title=node.get("title") or "") for node in nodes if node]

            if issues:
                numbers = ", ".join(str(issue.number) for issue in issues)
                logger.info(f"Found {len(issues)} linked issue(s) via GitHub API: {numbers}")

            return ClosingIssuesResult.ok(issues)

        except Exception as e:
            logger.warning(f"Could not fetch linked issues via GraphQL: {e}")
            return ClosingIssuesResult.failed(str(e))

    def get_timeline_events(self, repo_name: str, issue_number: int) -> List[TimelineEvent]:
        """Get all timeline events of an issue or pull request (REST API).

        Raises:
            GithubException: If the timeline cannot be fetched.
        """
        try:
            repo = self.get_repository(repo_name)
            issue = repo.get_issue(issue_number)
            events = [TimelineEvent.from_dict(item.raw_data) for item in issue.get_timeline()]
        except GithubException as e:
            logger.error(f"Failed to get timeline events for #{issue_number}: {e}")
            raise

        logger.debug(f"Fetched {len(events)} timeline event(s) for #{issue_number}")
        return events

    def add_comment_to_pr(self, repo_name: str, pr_number: int, comment: str) -> None:
        """Add a comment to a pull request.

        Args:
            repo_name: Repository name in format 'owner/repo'
            pr_number: PR number to comment on
            comment: Comment body to add
        """
        try:
            repo = self.get_repository(repo_name)
            pr = repo.get_pull(pr_number)
            pr.create_issue_comment(comment)
            logger.info(f"Added comment to PR #{pr_number}")

        except GithubException as e:
            logger.error(f"Failed to add comment to PR #{pr_number}: {e}")
            raise
