"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

config.py

Loads and writes the YAML configuration file (~/.bb.yml by default).
"""
import base64
import logging
import os

import yaml

from bitbucketpr.exceptions import ConfigError, GroupNotFound

log = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = os.path.join(os.path.expanduser('~'), '.bb.yml')

PROJECT_KEYS = ('source_project', 'source_slug', 'target_project', 'target_slug', 'target_branch')


def encode_credentials(username, password):
    """Build the Basic auth credential stored in the config."""
    auth = "{0}:{1}".format(username.strip(), password.strip())
    return base64.b64encode(auth.encode('utf-8')).decode('ascii')


class Project(object):
    """Where pull requests for one local repository come from and go to."""

    def __init__(self, name, source_project, source_slug, target_project, target_slug, target_branch):
        self.name = name
        self.source_project = source_project
        self.source_slug = source_slug
        self.target_project = target_project
        self.target_slug = target_slug
        self.target_branch = target_branch

    def __repr__(self):
        return '<%s(name=%s, target=%s/%s)>' % (
            self.__class__.__name__, self.name, self.target_project, self.target_slug)

    @classmethod
    def from_dict(cls, name, d):
        if not isinstance(d, dict):
            raise ConfigError("project '{0}' must be a mapping".format(name))
        missing = [k for k in PROJECT_KEYS if not d.get(k)]
        if missing:
            raise ConfigError("project '{0}' is missing: {1}".format(name, ', '.join(missing)))
        return cls(name, **{k: str(d[k]) for k in PROJECT_KEYS})

    def as_dict(self):
        return {k: getattr(self, k) for k in PROJECT_KEYS}


class Config(object):
    """The bitbucketpr configuration.

    Args:
        server (str): full URL of the Bitbucket server
        auth (str): Basic auth credential, see encode_credentials
        projects (dict): project name to Project
        groups (dict): reviewer group name to a set of user names
        open_in_browser (bool): always open created pull requests
        browser (str): command used to open URLs; the system browser if None
    """

    def __init__(self, server, auth, projects=None, groups=None, open_in_browser=False, browser=None):
        self.server = server
        self.auth = auth
        self.projects = projects if projects else {}
        self.groups = groups if groups else {}
        self.open_in_browser = open_in_browser
        self.browser = browser

    @classmethod
    def from_dict(cls, d):
        if not isinstance(d, dict):
            raise ConfigError("config must be a mapping")
        for key in ('server', 'auth'):
            if not d.get(key):
                raise ConfigError("config is missing '{0}'".format(key))
        projects = {}
        for name, project in (d.get('projects') or {}).items():
            projects[name] = Project.from_dict(name, project)
        open_in_browser = d.get('open_in_browser', False)
        if not isinstance(open_in_browser, bool):
            raise ConfigError("open_in_browser must be true or false")
        groups = {}
        for name, members in (d.get('groups') or {}).items():
            if members is None:
                members = []
            if not isinstance(members, list):
                raise ConfigError("group '{0}' must be a list of user names".format(name))
            groups[name] = set(str(m) for m in members)
        return cls(
            server=str(d['server']),
            auth=str(d['auth']),
            projects=projects,
            groups=groups,
            open_in_browser=open_in_browser,
            browser=d.get('browser'),
        )

    @classmethod
    def from_file(cls, path):
        """Load the configuration from a YAML file.

        Raises:
            ConfigError: if the file can't be read or is not a valid config.
        """
        log.debug("loading config from %s", path)
        try:
            with open(path) as fp:
                data = yaml.safe_load(fp)
        except OSError as err:
            raise ConfigError("unable to read config '{0}': {1}".format(path, err.strerror)) from err
        except yaml.YAMLError as err:
            raise ConfigError("invalid config '{0}': {1}".format(path, err)) from err
        return cls.from_dict(data)

    @staticmethod
    def create_file(path, server, auth, project_name, source_project, source_slug,
                    target_project, target_slug, target_branch):
        """Write a new configuration file with a single project and an empty default group."""
        project = Project(project_name, source_project, source_slug, target_project, target_slug, target_branch)
        content = {
            'server': server,
            'auth': auth,
            'open_in_browser': False,
            'browser': None,
            'projects': {project_name: project.as_dict()},
            'groups': {'default': []},
        }
        log.info("writing config to %s", path)
        with open(path, 'w') as fp:
            yaml.safe_dump(content, fp, default_flow_style=False, sort_keys=False)
        try:
            os.chmod(path, 0o600)
        except OSError:
            log.warning("could not restrict permissions on %s", path)

    def get_project(self, name):
        try:
            return self.projects[name]
        except KeyError:
            raise ConfigError("no project named '{0}' in config".format(name)) from None

    def get_group(self, name):
        """Get the members of a reviewer group.

        Raises:
            GroupNotFound: if there is no such group.
        """
        try:
            return set(self.groups[name])
        except KeyError:
            raise GroupNotFound(name) from None
