"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

Bitbucket Server client for creating and browsing pull requests.
"""
import logging

from bitbucketpr import resources
from bitbucketpr.connection import BitbucketConnection, decode_json, raise_for_errors
from bitbucketpr.exceptions import DryRun, InvalidPullRequest, MissingSelfLink
from bitbucketpr.pull_request import PullRequest

log = logging.getLogger(__name__)

# API reference:
# https://developer.atlassian.com/server/bitbucket/rest/


class Bitbucket(object):
    """
    Bitbucket is a client for the pull request parts of the Bitbucket Server REST API.

    Args:
        auth (str): the Basic auth credential, base64 of 'username:password'
        base_url (str): full URL for the server to access

    Raises:
        ConfigError: if base_url is not a valid absolute URL.

    Usage:

        import bitbucketpr
        bb = bitbucketpr.Bitbucket(auth='dXNlcjpwYXNz', base_url='https://bitbucket.example.com/')
        for pull_request in bb.list_pull_requests(role='REVIEWER'):
            print(pull_request.title)

    """

    def __init__(self, auth, base_url):
        self.conn = BitbucketConnection(url=base_url, auth=auth)

    def branch_exists(self, project, branch, debug=False):
        """Check if a branch exists in the target repository of a project.

        Bitbucket won't search branches by full ref name, so ask for a single
        commit until the branch instead. Only the status code is looked at.

        Args:
            project (bitbucketpr.config.Project): supplies target_project and target_slug
            branch (str): the branch name
            debug (bool): print the raw response body

        Returns:
            bool: True if the server answered with a success status.
        """
        log.info("checking for branch '%s' in %s/%s", branch, project.target_project, project.target_slug)
        uri = f'projects/{project.target_project}/repos/{project.target_slug}/commits'
        params = {'until': branch, 'limit': 1}
        response = self.conn.get_response(uri, parameters=params)
        if debug:
            print(response.text)
        return response.ok

    def create_pull_request(self, pull_request, dry=False, debug=False):
        """Submit a pull request.

        Args:
            pull_request (PullRequest): the pull request to create
            dry (bool): print the request body instead of sending it
            debug (bool): print the request and response bodies

        Returns:
            str: the URL of the created pull request

        Raises:
            InvalidPullRequest: if the target project or slug is missing.
            DryRun: if dry is set; nothing was sent.
            RequestError: if the server rejects the pull request.
            MissingSelfLink: if the response carries no self link.
        """
        project = pull_request.project()
        if project is None:
            raise InvalidPullRequest('project')
        slug = pull_request.slug()
        if slug is None:
            raise InvalidPullRequest('slug')
        uri = f'projects/{project}/repos/{slug}/pull-requests'
        body = pull_request.to_json()

        if debug:
            print(body)

        if dry:
            print(f'Dry run: "{body}"')
            raise DryRun(body)

        log.info("creating pull request in %s/%s", project, slug)
        response = self.conn.post_response(uri, content=body)
        raise_for_errors(response)
        if debug:
            print(response.text)
        data = decode_json(response)
        if not isinstance(data, dict):
            raise MissingSelfLink(response)
        created = PullRequest.from_response(data)
        url = created.self_link()
        if url is None:
            raise MissingSelfLink(response)
        return url

    def list_pull_requests(self, debug=False, role='ALL'):
        """Get the open pull requests from the current user's dashboard.

        Args:
            debug (bool): print the request URL and response body
            role (str): AUTHOR, REVIEWER, PARTICIPANT or ALL for any role

        Returns:
            resources.PullRequestList
        """
        uri = 'dashboard/pull-requests'
        params = {'state': 'OPEN'}
        # the only way to ask for any role is to leave the parameter out
        if role != 'ALL':
            params['role'] = role
        if debug:
            print(self.conn.prepared_url(uri, params))
        log.info("getting open pull requests (role: %s)", role)
        response = self.conn.get_response(uri, parameters=params)
        raise_for_errors(response)
        if debug:
            print(response.text)
        return resources.PullRequestList(decode_json(response))

    def user(self, filter, debug=False):
        """Search for users.

        Args:
            filter (str): matched against user name, display name and email
            debug (bool): print the request URL and response body

        Returns:
            resources.UserSearchResult
        """
        uri = 'users'
        params = {'filter': filter}
        if debug:
            print(self.conn.prepared_url(uri, params))
        log.info("searching users for '%s'", filter)
        response = self.conn.get_response(uri, parameters=params)
        raise_for_errors(response)
        if debug:
            print(response.text)
        return resources.UserSearchResult(decode_json(response))
