"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

utils.py

Utilities for the command line tool.
"""
import json
import logging
import os
import shlex
import subprocess
import webbrowser

from bitbucketpr import git
from bitbucketpr.exceptions import BrowserError
from bitbucketpr.resources import BitbucketObject

log = logging.getLogger(__name__)


PROJECT_FILE = '.bitbucket-proj'


class BitbucketJsonEncoder(json.JSONEncoder):
    """JSON Encoder for Bitbucket objects.

    Usage:
        json.dump(bitbucket_object, fp, cls=BitbucketJsonEncoder)
    """

    def default(self, obj):
        if isinstance(obj, BitbucketObject):
            return obj._raw
        else:
            return super(BitbucketJsonEncoder, self).default(obj)


def get_project_name(cwd=None):
    """The config project name for the current repository.

    The contents of a .bitbucket-proj file at the repository root if there
    is one, otherwise the name of the repository directory.
    """
    root = git.repository_root(cwd)
    project_file = os.path.join(root, PROJECT_FILE)
    if os.path.isfile(project_file):
        with open(project_file) as fp:
            name = fp.read().strip()
        if name:
            log.debug("project name '%s' from %s", name, project_file)
            return name
    return os.path.basename(root)


def open_in_browser(config, url):
    """Open a URL with the configured browser command, or the system browser.

    Raises:
        BrowserError: if the browser command is missing or fails.
    """
    try:
        if config.browser:
            cmd = shlex.split(config.browser) + [url]
            log.debug("running %s", cmd)
            subprocess.run(cmd, check=True)
        else:
            webbrowser.open(url)
    except subprocess.CalledProcessError as err:
        raise BrowserError("browser exited with status {0}".format(err.returncode)) from err
    except (OSError, webbrowser.Error) as err:
        raise BrowserError("unable to open browser: {0}".format(err)) from err
