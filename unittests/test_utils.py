"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

Test utils

Unit tests for the git helpers and command line utilities
"""
import os
import sys

parent_dir = os.path.abspath(os.path.join(os.path.split(__file__)[0], '..'))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from unittest import mock
import shutil
import subprocess
import tempfile
import unittest
import webbrowser

from bitbucketpr import git, utils
from bitbucketpr.config import Config
from bitbucketpr.exceptions import BrowserError, GitError


def completed(stdout):
    return subprocess.CompletedProcess(args=['git'], returncode=0, stdout=stdout, stderr='')


class TestGit(unittest.TestCase):

    @mock.patch('subprocess.run')
    def test_current_branch(self, mock_run):
        mock_run.return_value = completed('feature/widgets\n')

        self.assertEqual(git.current_branch(), 'feature/widgets')
        args, kwargs = mock_run.call_args
        self.assertEqual(args[0], ['git', 'rev-parse', '--abbrev-ref', 'HEAD'])
        self.assertTrue(kwargs['check'])

    @mock.patch('subprocess.run')
    def test_current_branch_detached(self, mock_run):
        mock_run.return_value = completed('HEAD\n')

        with self.assertRaisesRegex(GitError, 'detached'):
            git.current_branch()

    @mock.patch('subprocess.run')
    def test_not_a_repository(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(
            128, ['git'], output='', stderr='fatal: not a git repository\n')

        with self.assertRaisesRegex(GitError, 'not a git repository'):
            git.current_branch()

    @mock.patch('subprocess.run')
    def test_git_missing(self, mock_run):
        mock_run.side_effect = FileNotFoundError('git')

        with self.assertRaisesRegex(GitError, 'git not found'):
            git.repository_root()


class TestProjectName(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.root = os.path.join(self.tmpdir, 'widgets')
        os.mkdir(self.root)
        patcher = mock.patch.object(git, 'repository_root', return_value=self.root)
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_directory_name(self):
        self.assertEqual(utils.get_project_name(), 'widgets')

    def test_project_file(self):
        with open(os.path.join(self.root, utils.PROJECT_FILE), 'w') as fp:
            fp.write('gadgets\n')

        self.assertEqual(utils.get_project_name(), 'gadgets')

    def test_empty_project_file(self):
        with open(os.path.join(self.root, utils.PROJECT_FILE), 'w') as fp:
            fp.write('\n')

        self.assertEqual(utils.get_project_name(), 'widgets')


class TestOpenInBrowser(unittest.TestCase):

    @mock.patch('webbrowser.open')
    def test_system_browser(self, mock_open):
        config = Config('http://nope.nope/', 'abc')

        utils.open_in_browser(config, 'http://nope.nope/pr/1')

        mock_open.assert_called_once_with('http://nope.nope/pr/1')

    @mock.patch('subprocess.run')
    def test_browser_command(self, mock_run):
        config = Config('http://nope.nope/', 'abc', browser='firefox --new-tab')

        utils.open_in_browser(config, 'http://nope.nope/pr/1')

        args, kwargs = mock_run.call_args
        self.assertEqual(args[0], ['firefox', '--new-tab', 'http://nope.nope/pr/1'])

    @mock.patch('subprocess.run')
    def test_browser_command_missing(self, mock_run):
        mock_run.side_effect = FileNotFoundError(2, 'No such file or directory')
        config = Config('http://nope.nope/', 'abc', browser='nosuchbrowser')

        with self.assertRaises(BrowserError) as ctx:
            utils.open_in_browser(config, 'http://nope.nope/pr/1')

        self.assertIn('unable to open browser', str(ctx.exception))

    @mock.patch('subprocess.run')
    def test_browser_command_fails(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(3, ['firefox', 'http://nope.nope/pr/1'])
        config = Config('http://nope.nope/', 'abc', browser='firefox')

        with self.assertRaises(BrowserError) as ctx:
            utils.open_in_browser(config, 'http://nope.nope/pr/1')

        self.assertEqual(str(ctx.exception), 'browser exited with status 3')

    @mock.patch('webbrowser.open')
    def test_system_browser_fails(self, mock_open):
        mock_open.side_effect = webbrowser.Error('could not locate runnable browser')
        config = Config('http://nope.nope/', 'abc')

        with self.assertRaises(BrowserError):
            utils.open_in_browser(config, 'http://nope.nope/pr/1')


if __name__ == '__main__':
    unittest.main()
