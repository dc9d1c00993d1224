"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

exceptions.py

Errors raised while building and submitting pull requests.
"""


class BitbucketPRError(Exception):
    """Base class for all bitbucketpr errors."""


class ConfigError(BitbucketPRError):
    """The configuration (file, server URL or project) is unusable."""


class GroupNotFound(ConfigError):
    """A reviewer group name is not present in the configuration."""

    def __init__(self, group):
        super(GroupNotFound, self).__init__("no such reviewer group: '{0}'".format(group))
        self.group = group


class InvalidPullRequest(BitbucketPRError):
    """The pull request lacks a field required for submission."""

    def __init__(self, field):
        """Create an InvalidPullRequest error.

        Args:
            field (str): name of the missing field, 'project' or 'slug'.
        """
        super(InvalidPullRequest, self).__init__("missing toRef {0}".format(field))
        self.field = field


class DryRun(BitbucketPRError):
    """Raised in place of submitting a pull request during a dry run.

    This is not a failure: the request was deliberately not sent.
    """

    def __init__(self, body=None):
        super(DryRun, self).__init__("dry run, pull request not submitted")
        self.body = body


class RequestError(BitbucketPRError):
    """The server answered with a non-success status."""

    def __init__(self, body, status_code=None, response=None):
        """Create a RequestError.

        Args:
            body (str): the raw response body, exactly as received.
            status_code (int, optional): the HTTP status code.
            response (requests.Response, optional): the original Response object.
        """
        super(RequestError, self).__init__(body)
        self.body = body
        self.status_code = status_code
        self.response = response


class MissingSelfLink(BitbucketPRError):
    """A successful response carried no links.self[0].href."""

    def __init__(self, response=None):
        super(MissingSelfLink, self).__init__("response has no self link")
        self.response = response


class GitError(BitbucketPRError):
    """A git command could not be run or failed."""


class BrowserError(BitbucketPRError):
    """The browser could not be started."""
