"""Command Line Interface for Linked-Issue Check."""

from typing import Optional

import click
from dotenv import load_dotenv
from github.GithubException import GithubException

from . import __version__ as LINKED_ISSUE_CHECK_VERSION
from .config import settings
from .detector import LinkedIssueDetector
from .event_context import get_event_action, is_trigger_action, load_event_payload, resolve_pr_number, resolve_repo_name
from .exceptions import PullRequestContextError
from .github_client import GitHubClient
from .logger_config import get_logger, setup_logger
from .models import PullRequestContext
from .reporter import OutcomeReporter, post_failure_comment

# Load environment variables
load_dotenv()

logger = get_logger(__name__)


def get_github_token_or_fail(provided_token: Optional[str]) -> str:
    """Get GitHub token from the option/environment or the loaded settings."""
    token = provided_token or settings.github_token
    if token:
        return token

    raise click.ClickException(
        "GitHub token is required. Please either:\n"
        "1. Set GITHUB_TOKEN environment variable (e.g. `GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }}`), or\n"
        "2. Use --github-token option"
    )


def resolve_pull_request(client: GitHubClient, repo: Optional[str], pr_number: Optional[int], payload: dict) -> PullRequestContext:
    """Identify the PR from options and event payload, then fetch its current title and body."""
    try:
        repo_name = resolve_repo_name(repo or settings.github_repository, payload)
        number = resolve_pr_number(pr_number, payload)
        return client.get_pull_request_context(repo_name, number)
    except (PullRequestContextError, ValueError) as e:
        raise click.ClickException(str(e))
    except GithubException as e:
        raise click.ClickException(f"Failed to fetch pull request: {e}")


def _common_options(func):
    func = click.option("--github-token", envvar="GITHUB_TOKEN", help="GitHub API token")(func)
    func = click.option("--event-path", envvar="GITHUB_EVENT_PATH", help="Path to the pull_request event payload (JSON)")(func)
    func = click.option("--pr", "pr_number", type=int, help="Pull request number (defaults to the event payload)")(func)
    func = click.option("--repo", envvar="GITHUB_REPOSITORY", help="Repository in owner/repo format")(func)
    return func


@click.group(help="Linked-Issue Check: fail pull requests that are not linked to an issue.")
@click.version_option(version=LINKED_ISSUE_CHECK_VERSION, package_name="linked-issue-check")
def main() -> None:
    pass


@main.command()
@_common_options
@click.option("--comment/--no-comment", default=True, show_default=True, help="Post an explanatory comment when the check fails")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Log level (defaults to LOG_LEVEL)",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also write logs to this file (defaults to LOG_FILE)")
@click.pass_context
def check(
    ctx: click.Context,
    repo: Optional[str],
    pr_number: Optional[int],
    event_path: Optional[str],
    github_token: Optional[str],
    comment: bool,
    log_level: Optional[str],
    log_file: Optional[str],
) -> None:
    """Check that the pull request is linked to at least one issue."""
    setup_logger(log_level=log_level, log_file=log_file or settings.log_file)

    try:
        payload = load_event_payload(event_path or settings.github_event_path)
    except PullRequestContextError as e:
        raise click.ClickException(str(e))

    action = get_event_action(payload)
    if not is_trigger_action(action):
        logger.info(f"Skipping linked-issue check for pull_request action '{action}'")
        return

    token = get_github_token_or_fail(github_token)
    client = GitHubClient.get_instance(token)
    pr = resolve_pull_request(client, repo, pr_number, payload)

    result = LinkedIssueDetector(client, settings.closing_issues_limit).detect(pr)
    if OutcomeReporter().report(result):
        return

    # The failed result is already reported; commenting is a separate step.
    if comment:
        try:
            post_failure_comment(client, pr)
        except GithubException as e:
            logger.error(f"Could not post failure comment on PR #{pr.number}: {e}")
    ctx.exit(1)


@main.command()
@_common_options
def comment(
    repo: Optional[str],
    pr_number: Optional[int],
    event_path: Optional[str],
    github_token: Optional[str],
) -> None:
    """Post the missing-linked-issue comment on a pull request."""
    setup_logger()

    try:
        payload = load_event_payload(event_path or settings.github_event_path)
        repo_name = resolve_repo_name(repo or settings.github_repository, payload)
        number = resolve_pr_number(pr_number, payload)
        pr = PullRequestContext.from_repo_name(repo_name, number)
    except (PullRequestContextError, ValueError) as e:
        raise click.ClickException(str(e))

    token = get_github_token_or_fail(github_token)
    client = GitHubClient.get_instance(token)
    try:
        post_failure_comment(client, pr)
    except GithubException as e:
        raise click.ClickException(f"Failed to post comment on PR #{pr.number}: {e}")
    click.echo(f"Posted missing-linked-issue comment on PR #{pr.number}")


# Set the command name to 'linked-issue-check' when used as a CLI
main.name = "linked-issue-check"


if __name__ == "__main__":
    main()
