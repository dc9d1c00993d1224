"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

git.py

Reads the state of the local working copy with the git executable.
"""
import logging
import subprocess

from bitbucketpr.exceptions import GitError

log = logging.getLogger(__name__)


def _run_git(args, cwd=None):
    """Run a git command and return its stripped stdout; raise GitError on failure."""
    cmd = ['git'] + list(args)
    log.debug("running %s", ' '.join(cmd))
    try:
        result = subprocess.run(cmd, cwd=cwd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as err:
        message = (err.stderr or err.stdout or '').strip()
        raise GitError("git {0}: {1}".format(' '.join(args), message)) from err
    except FileNotFoundError as err:
        raise GitError("git not found") from err
    return result.stdout.strip()


def current_branch(cwd=None):
    """The name of the checked out branch.

    Raises:
        GitError: outside a repository or with a detached HEAD.
    """
    branch = _run_git(['rev-parse', '--abbrev-ref', 'HEAD'], cwd=cwd)
    if branch == 'HEAD':
        raise GitError("HEAD is detached, check out a branch first")
    return branch


def repository_root(cwd=None):
    """The top level directory of the working copy."""
    return _run_git(['rev-parse', '--show-toplevel'], cwd=cwd)
