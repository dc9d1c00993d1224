"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

Resources

Read-only containers for responses of the Bitbucket Server REST API.
Objects here are created by the Bitbucket client; they are displayed,
never modified.
"""
# pylint: disable=E1101


class BitbucketAttribute(dict):
    """Container class for holding child attributes."""

    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError:
            raise AttributeError(item)

    def __dir__(self):
        return list(self.keys())


class BitbucketObject(object):
    """Base Bitbucket Server resource object."""

    _raw = None

    def __init__(self, resource_dict):
        """Create a Bitbucket resource.

        Args:
            resource_dict (BitbucketAttribute): base object dictionary
        """
        self._raw = resource_dict

    def __getattr__(self, item):
        try:
            return self._raw[item]
        except (KeyError, TypeError):
            return object.__getattribute__(self, item)

    def __getitem__(self, item):
        return self._raw[item]

    def get(self, item, default=None):
        return self._raw.get(item, default)

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return self._raw == other._raw
        return False

    def __contains__(self, item):
        return item in self._raw

    def __dir__(self):
        return list(self._raw.keys()) + list(dir(type(self)))


class UserResource(BitbucketObject):
    """Bitbucket Server user resource."""

    def __repr__(self):
        return '<%s(slug=%s)>' % (self.__class__.__name__, self.get('slug'))

    def __str__(self):
        return self.get('name') or self.get('slug', '')

    @property
    def display_name(self):
        return self.get('displayName', str(self))


class ParticipantResource(BitbucketObject):
    """Bitbucket Server review participant resource."""

    @property
    def name(self):
        return self._raw['user']['name']

    def __repr__(self):
        return '<%s(participant=%s)>' % (self.__class__.__name__, self.name)


class PullRequestResource(BitbucketObject):
    """An existing pull request as returned by the server."""

    def __init__(self, resource_dict):
        super(PullRequestResource, self).__init__(resource_dict)
        self.author = ParticipantResource(self._raw['author']) if 'author' in self._raw else None
        self.reviewers = [ParticipantResource(r) for r in self._raw.get('reviewers', [])]

    @property
    def url(self):
        """Return the web URL for this resource."""
        try:
            return self._raw['links']['self'][0]['href']
        except (KeyError, IndexError, TypeError):
            return None

    @property
    def project(self):
        return self._raw['toRef']['repository']['project']['key']

    @property
    def slug(self):
        return self._raw['toRef']['repository']['slug']

    @property
    def from_branch(self):
        return self._raw['fromRef']['displayId']

    @property
    def to_branch(self):
        return self._raw['toRef']['displayId']

    def __repr__(self):
        return '<%s(project=%s, repo=%s, id=%s)>' % (
            self.__class__.__name__, self.project, self.slug, self.get('id'))


class PagedResult(BitbucketObject):
    """One page of a paged API response. Iterates over its entries."""

    entry_class = BitbucketObject

    def __init__(self, resource_dict):
        if not isinstance(resource_dict, dict):
            raise ValueError("expected a JSON object, got {0}".format(type(resource_dict).__name__))
        super(PagedResult, self).__init__(resource_dict)
        self.values = [self.entry_class(v) for v in self._raw.get('values', [])]

    def __iter__(self):
        return iter(self.values)

    def __len__(self):
        return len(self.values)

    @property
    def is_last_page(self):
        return self.get('isLastPage', True)


class PullRequestList(PagedResult):
    """Open pull requests from the dashboard."""

    entry_class = PullRequestResource


class UserSearchResult(PagedResult):
    """Users matching a search filter."""

    entry_class = UserResource
