"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

Test config

Unit tests for loading and writing the configuration file
"""
import os
import sys

parent_dir = os.path.abspath(os.path.join(os.path.split(__file__)[0], '..'))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

import base64
import shutil
import tempfile
import unittest

import yaml

from bitbucketpr.config import Config, Project, encode_credentials
from bitbucketpr.exceptions import ConfigError, GroupNotFound


CONFIG_TEXT = """\
server: https://bitbucket.nope.nope/
auth: dGVzdHVzZXI6cGFzc3dvcmQ=
open_in_browser: true
projects:
  widgets:
    source_project: ~JDOE
    source_slug: widgets
    target_project: WID
    target_slug: widgets
    target_branch: master
groups:
  default:
    - alice
    - bob
  empty:
"""


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, 'bb.yml')

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def write(self, text):
        with open(self.path, 'w') as fp:
            fp.write(text)

    def test_from_file(self):
        self.write(CONFIG_TEXT)

        config = Config.from_file(self.path)

        self.assertEqual(config.server, 'https://bitbucket.nope.nope/')
        self.assertEqual(config.auth, 'dGVzdHVzZXI6cGFzc3dvcmQ=')
        self.assertTrue(config.open_in_browser)
        self.assertIsNone(config.browser)
        project = config.get_project('widgets')
        self.assertIsInstance(project, Project)
        self.assertEqual(project.source_project, '~JDOE')
        self.assertEqual(project.target_project, 'WID')
        self.assertEqual(project.target_branch, 'master')
        self.assertEqual(config.get_group('default'), {'alice', 'bob'})
        self.assertEqual(config.get_group('empty'), set())

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            Config.from_file(os.path.join(self.tmpdir, 'nope.yml'))

    def test_invalid_yaml(self):
        self.write("server: [unclosed\n")

        with self.assertRaises(ConfigError):
            Config.from_file(self.path)

    def test_invalid_documents(self):
        cases = [
            "just a string\n",
            "auth: abc\n",
            "server: http://nope.nope/\n",
            "server: http://nope.nope/\nauth: abc\ngroups:\n  default: alice\n",
            "server: http://nope.nope/\nauth: abc\nprojects:\n  widgets:\n    source_project: X\n",
            "server: http://nope.nope/\nauth: abc\nopen_in_browser: \"false\"\n",
            "server: http://nope.nope/\nauth: abc\nopen_in_browser: 1\n",
        ]
        for text in cases:
            with self.subTest(text=text):
                self.write(text)
                with self.assertRaises(ConfigError):
                    Config.from_file(self.path)

    def test_unknown_project(self):
        self.write(CONFIG_TEXT)
        config = Config.from_file(self.path)

        with self.assertRaisesRegex(ConfigError, 'gadgets'):
            config.get_project('gadgets')

    def test_unknown_group(self):
        self.write(CONFIG_TEXT)
        config = Config.from_file(self.path)

        with self.assertRaises(GroupNotFound) as ctx:
            config.get_group('admins')

        self.assertIsInstance(ctx.exception, ConfigError)
        self.assertEqual(ctx.exception.group, 'admins')

    def test_create_file(self):
        Config.create_file(self.path, 'https://bitbucket.nope.nope/', 'abc', 'widgets',
                           '~JDOE', 'widgets', 'WID', 'widgets', 'develop')

        with open(self.path) as fp:
            data = yaml.safe_load(fp)
        self.assertEqual(data['groups'], {'default': []})
        config = Config.from_file(self.path)
        self.assertEqual(config.server, 'https://bitbucket.nope.nope/')
        self.assertFalse(config.open_in_browser)
        self.assertEqual(config.get_project('widgets').target_branch, 'develop')
        self.assertEqual(config.get_group('default'), set())

    def test_encode_credentials(self):
        auth = encode_credentials(' testuser ', 'password\n')

        self.assertEqual(base64.b64decode(auth), b'testuser:password')


if __name__ == '__main__':
    unittest.main()
