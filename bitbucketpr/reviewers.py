"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

reviewers.py

Works out who reviews a pull request.
"""
import logging

log = logging.getLogger(__name__)


DEFAULT_GROUP = 'default'


def resolve_reviewers(config, reviewers=None, groups=None, append=None):
    """Compute the reviewer set for a pull request.

    An explicit reviewer list wins outright: groups and append are ignored.
    Otherwise the members of the named groups (or of the default group when
    none are named) are used, plus any appended names.

    Args:
        config (bitbucketpr.config.Config): supplies the reviewer groups
        reviewers (list): explicit user names
        groups (list): reviewer group names
        append (list): user names added to the group members

    Returns:
        set: user names

    Raises:
        GroupNotFound: if a group is not in the config.
    """
    if reviewers:
        return set(reviewers)

    result = set()
    for group in groups or [DEFAULT_GROUP]:
        result |= config.get_group(group)
        log.debug("reviewers after group '%s': %s", group, sorted(result))
    if append:
        result.update(append)
    return result
