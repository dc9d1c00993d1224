"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

pull_request.py

The pull request payload sent to Bitbucket Server.
"""
from collections import namedtuple
import json


Ref = namedtuple('Ref', ['branch', 'slug', 'project'])
Ref.__doc__ = "One side of a pull request: branch, repository slug and project key."


def _ref_dict(ref):
    return {
        'id': ref.branch,
        'repository': {
            'slug': ref.slug,
            'project': {'key': ref.project}
        }
    }


def _ref_from_dict(d):
    if not d:
        return None
    repository = d.get('repository') or {}
    project = repository.get('project') or {}
    return Ref(d.get('displayId', d.get('id')), repository.get('slug'), project.get('key'))


class PullRequest(object):
    """Pull request built up one setter at a time, then serialized.

    Usage:

        pull_request = PullRequest("Fix the widget")
        pull_request.from_ref('feature/widget', 'widgets', '~JDOE')
        pull_request.to_ref('master', 'widgets', 'WID')
        pull_request.description("Widget no longer explodes.")
        pull_request.reviewers(['alice', 'bob'])
        body = pull_request.to_json()
    """

    def __init__(self, title):
        self.title = title
        self.details = ''
        self.source = None
        self.target = None
        self.reviewer_names = set()
        self.links = None

    def __repr__(self):
        return '<%s(title=%r, target=%r)>' % (self.__class__.__name__, self.title, self.target)

    def from_ref(self, branch, slug, project):
        """Set the source branch, repo slug and project key."""
        self.source = Ref(branch, slug, project)
        return self

    def to_ref(self, branch, slug, project):
        """Set the target branch, repo slug and project key."""
        self.target = Ref(branch, slug, project)
        return self

    def description(self, text):
        self.details = text if text is not None else ''
        return self

    def reviewers(self, names):
        """Replace the reviewers with the given user names.

        Args:
            names (iterable): user names as strings
        """
        self.reviewer_names = set(names)
        return self

    def project(self):
        """The target project key, or None if the target was never set."""
        if self.target is None or not self.target.project:
            return None
        return self.target.project

    def slug(self):
        """The target repository slug, or None if the target was never set."""
        if self.target is None or not self.target.slug:
            return None
        return self.target.slug

    def self_link(self):
        """The canonical URL of this pull request, from links.self[0].href.

        Only available on pull requests built from a server response.

        Returns:
            str: the URL, or None if the response carried no self link.
        """
        try:
            return self.links['self'][0]['href']
        except (KeyError, IndexError, TypeError):
            return None

    def as_dict(self):
        content = {
            'title': self.title,
            'description': self.details,
        }
        if self.source is not None:
            content['fromRef'] = _ref_dict(self.source)
        if self.target is not None:
            content['toRef'] = _ref_dict(self.target)
        content['reviewers'] = [{'user': {'name': name}} for name in sorted(self.reviewer_names)]
        return content

    def to_json(self):
        return json.dumps(self.as_dict())

    @classmethod
    def from_response(cls, data):
        """Build a PullRequest from a decoded pull request resource.

        Args:
            data (dict): the decoded JSON of a pull request.

        Returns:
            PullRequest
        """
        pull_request = cls(data.get('title'))
        pull_request.description(data.get('description'))
        pull_request.source = _ref_from_dict(data.get('fromRef'))
        pull_request.target = _ref_from_dict(data.get('toRef'))
        pull_request.reviewers(r['user']['name'] for r in data.get('reviewers', []))
        pull_request.links = data.get('links')
        return pull_request
