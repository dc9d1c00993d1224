"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

Create pull requests on Bitbucket Server from the command line.
"""
__version__ = '1.0.0' # also located in setup.py

from bitbucketpr.bitbucket import Bitbucket
from bitbucketpr.pull_request import PullRequest
from bitbucketpr.reviewers import resolve_reviewers
