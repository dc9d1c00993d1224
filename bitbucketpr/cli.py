"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

cli.py

The `bb` command: create and list pull requests on Bitbucket Server.
"""
from contextlib import contextmanager
import json
import logging
from typing import List, Optional

import requests
import typer

from bitbucketpr import git, utils
from bitbucketpr.bitbucket import Bitbucket
from bitbucketpr.config import DEFAULT_CONFIG_PATH, Config, encode_credentials
from bitbucketpr.exceptions import BitbucketPRError, DryRun, RequestError
from bitbucketpr.pull_request import PullRequest
from bitbucketpr.reviewers import resolve_reviewers

log = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Create pull requests on Bitbucket Server.")

ROLES = ('ALL', 'AUTHOR', 'REVIEWER', 'PARTICIPANT')


class Settings(object):
    """Global command line options."""

    def __init__(self, config_path, debug):
        self.config_path = config_path
        self.debug = debug

    def load(self):
        """Load the config and create a client from it."""
        config = Config.from_file(self.config_path)
        return config, Bitbucket(config.auth, config.server)


@contextmanager
def _reported_errors():
    """Turn library errors into a message on stderr and exit status 1."""
    try:
        yield
    except RequestError as err:
        typer.echo("Request failed ({0}):".format(err.status_code), err=True)
        typer.echo(err.body, err=True)
        raise typer.Exit(code=1)
    except (BitbucketPRError, requests.RequestException, ValueError) as err:
        log.debug("command failed", exc_info=True)
        typer.echo("error: {0}".format(err), err=True)
        raise typer.Exit(code=1)


@app.callback()
def main_options(
    ctx: typer.Context,
    config: str = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="sets the config file to use"),
    debug: bool = typer.Option(False, "--debug", "-d", help="print requests and responses"),
):
    logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING)
    ctx.obj = Settings(config, debug)


@app.command()
def setup(ctx: typer.Context):
    """Interactively write a new config file."""
    path = ctx.obj.config_path
    server = typer.prompt("bitbucket server url")
    username = typer.prompt("username")
    password = typer.prompt("password", hide_input=True)

    typer.echo("\nThe project name should be the same as the repo basename (directory).\n"
               "To name the project of a repo explicitly, put the name in a\n"
               "{0} file at the root of the repo.".format(utils.PROJECT_FILE))
    project_name = typer.prompt("primary project name")

    typer.echo("\nThe source project is the project KEY, or ~username for a personal\n"
               "project, that pull requests are made from.")
    source_project = typer.prompt("source project")
    source_slug = typer.prompt("source slug")

    typer.echo("\nThe target project is the project KEY that pull requests are made to.")
    target_project = typer.prompt("target project")
    target_slug = typer.prompt("target slug")
    typer.echo("\nThe target branch can be overridden on the command line.")
    target_branch = typer.prompt("target branch")

    with _reported_errors():
        Config.create_file(path, server, encode_credentials(username, password), project_name,
                           source_project, source_slug, target_project, target_slug, target_branch)
    typer.echo("\nPlease edit {0} to have your desired configuration "
               "(particularly reviewer groups)".format(path))


@app.command()
def groups(ctx: typer.Context):
    """List the reviewer groups."""
    with _reported_errors():
        config = Config.from_file(ctx.obj.config_path)
    for name, members in sorted(config.groups.items()):
        typer.echo("{0}: {1}".format(name, ', '.join(sorted(members))))


@app.command()
def pr(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="title of the pull request"),
    description: str = typer.Option("", "--description", "-m", help="description of the pull request"),
    long_description: bool = typer.Option(False, "--long-description", "-l",
                                          help="read the description from stdin"),
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="target branch"),
    reviewer: Optional[List[str]] = typer.Option(None, "--reviewer", "-r",
                                                 help="reviewer; replaces groups entirely"),
    group: Optional[List[str]] = typer.Option(None, "--group", "-g", help="reviewer group"),
    append: Optional[List[str]] = typer.Option(None, "--append", "-a",
                                               help="reviewer added to the groups"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="print the request, don't send it"),
    open_browser: bool = typer.Option(False, "--open", "-o", help="open the pull request in a browser"),
):
    """Create a pull request from the current branch."""
    debug = ctx.obj.debug
    with _reported_errors():
        config, client = ctx.obj.load()
        project = config.get_project(utils.get_project_name())

        if long_description:
            description = typer.get_text_stream('stdin').read().strip()

        source_branch = git.current_branch()
        target_branch = branch or project.target_branch
        pull_request = PullRequest(title)
        pull_request.from_ref(source_branch, project.source_slug, project.source_project)
        pull_request.to_ref(target_branch, project.target_slug, project.target_project)
        pull_request.description(description)

        reviewers = resolve_reviewers(config, reviewers=reviewer, groups=group, append=append)
        typer.echo("computed reviewers: {0}".format(', '.join(sorted(reviewers))))
        pull_request.reviewers(reviewers)

        if not dry_run and not client.branch_exists(project, target_branch, debug):
            typer.echo("warning: target branch '{0}' was not found in {1}/{2}".format(
                target_branch, project.target_project, project.target_slug), err=True)

        try:
            url = client.create_pull_request(pull_request, dry_run, debug)
        except DryRun:
            return

        typer.echo("Created pull request: {0}".format(url))
        if open_browser or config.open_in_browser:
            typer.echo("Opening in browser...")
            utils.open_in_browser(config, url)


@app.command()
def prs(
    ctx: typer.Context,
    role: str = typer.Option('ALL', "--role", help="ALL, AUTHOR, REVIEWER or PARTICIPANT"),
    as_json: bool = typer.Option(False, "--json", help="print the raw pull requests as JSON"),
):
    """List your open pull requests."""
    role = role.upper()
    if role not in ROLES:
        typer.echo("error: role must be one of {0}".format(', '.join(ROLES)), err=True)
        raise typer.Exit(code=2)
    with _reported_errors():
        _, client = ctx.obj.load()
        result = client.list_pull_requests(ctx.obj.debug, role)
    if as_json:
        typer.echo(json.dumps(result.values, cls=utils.BitbucketJsonEncoder, indent=2))
        return
    for pull_request in result:
        typer.echo("{0}/{1}#{2}\t{3} -> {4}\t{5}\t{6}".format(
            pull_request.project, pull_request.slug, pull_request.id,
            pull_request.from_branch, pull_request.to_branch,
            pull_request.title, pull_request.url or ''))


@app.command()
def users(
    ctx: typer.Context,
    filter: str = typer.Argument(..., help="matched against user name, display name and email"),
    as_json: bool = typer.Option(False, "--json", help="print the raw users as JSON"),
):
    """Search for users, e.g. to find reviewer names."""
    with _reported_errors():
        _, client = ctx.obj.load()
        result = client.user(filter, ctx.obj.debug)
    if as_json:
        typer.echo(json.dumps(result.values, cls=utils.BitbucketJsonEncoder, indent=2))
        return
    for user in result:
        typer.echo("{0}\t{1}\t{2}".format(user, user.display_name, user.get('emailAddress', '')))


def main():
    app()
