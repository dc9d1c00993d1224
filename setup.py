"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

Setup bitbucketpr

Install script for the bitbucketpr pull request tool.

"""
from setuptools import setup, find_packages
VERSION = '1.0.0' # also located in bitbucketpr/__init__.py

REQUIRED_PACKAGES = [
    'requests>=2.4.2',
    'PyYAML>=5.1',
    'typer>=0.9',
]

setup(
    name='bitbucketpr',
    description="Create pull requests on Stash/Bitbucket Server from the command line.",
    version=VERSION,
    packages=find_packages(exclude=['unittests']),
    python_requires='>=3.7',
    install_requires=REQUIRED_PACKAGES,
    entry_points={
        'console_scripts': [
            'bb=bitbucketpr.cli:main',
        ],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Intended Audience :: Developers',
        'Environment :: Console',
        'License :: OSI Approved :: BSD License',
        'Topic :: Software Development :: Version Control :: Git',
        'Topic :: Utilities'
    ]
)
