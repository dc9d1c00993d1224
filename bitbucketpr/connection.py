"""
Copyright (C) 2021 Schweitzer Engineering Laboratories, Pullman, Washington

connection.py

Defines the connection object for connecting to Bitbucket.
"""
import logging
from urllib.parse import urljoin, urlparse

import requests

from bitbucketpr.exceptions import ConfigError, RequestError
from bitbucketpr.resources import BitbucketAttribute

log = logging.getLogger(__name__)


API_BASE = 'rest/api/1.0/'
CONTENT_TYPE = 'application/json; charset=utf-8'


def validate_url(url):
    """Check that the URL is absolute and make sure it ends in a slash.

    Args:
        url (str): the server URL from the configuration

    Returns:
        str: the URL, with a trailing slash

    Raises:
        ConfigError: if the URL is not an absolute http(s) URL.
    """
    try:
        parsed = urlparse(url)
    except (TypeError, ValueError, AttributeError) as err:
        raise ConfigError("invalid server url '{0}': {1}".format(url, err)) from None
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ConfigError("invalid server url '{0}'".format(url))
    # urljoin drops the last path segment unless it ends in a slash
    if not url.endswith('/'):
        url += '/'
    return url


class BitbucketConnection(object):
    """Authenticated connection to a Bitbucket Server."""

    def __init__(self, url, auth, base=API_BASE):
        """Create a connection object.

        Args:
            url (str): full URL to the server
            auth (str): the Basic auth credential, base64 of 'username:password'
            base (str): the API base/version path

        Raises:
            ConfigError: if the url is not a valid absolute URL.
        """
        self._session = None
        self.url = validate_url(url)
        self._base = base
        self._headers = {
            'Authorization': "Basic {0}".format(auth),
            'Content-Type': CONTENT_TYPE,
        }
        self.last_response = None

    def __del__(self):
        # sometimes requests doesn't release the SSL socket at the end
        self.close()

    @property
    def session(self):
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self._headers)
        return self._session

    def close(self):
        if self._session:
            self._session.close()
            self._session = None

    def build_url(self, uri):
        """Compose the full URL for an API uri."""
        return urljoin(self.url, urljoin(self._base, uri))

    def prepared_url(self, uri, parameters=None):
        """The full URL, query string included, that a GET of uri would request."""
        request = requests.PreparedRequest()
        request.prepare_url(self.build_url(uri), parameters)
        return request.url

    def get_response(self, uri, parameters=None):
        """Perform an HTTP GET request, without error or JSON processing.

        Args:
            uri (str): the uri to GET from
            parameters (dict): additional URL parameters to add to the request

        Returns:
            requests.Response: the response object
        """
        args = {'url': self.build_url(uri)}
        log.debug("GET request: " + args['url'])
        if parameters:
            args['params'] = parameters
        response = self.session.get(**args)
        self.last_response = response
        return response

    def post_response(self, uri, content=None):
        """Perform an HTTP POST request, without error or JSON processing.

        Args:
            uri (str): the uri to POST to
            content (str): serialized JSON to be POSTed to the URI.

        Returns:
            requests.Response: an HTTP response object.
        """
        args = {'url': self.build_url(uri)}
        log.debug("POST request: " + args['url'])
        if content:
            args['data'] = content.encode('utf-8')
        response = self.session.post(**args)
        self.last_response = response
        return response


def decode_json(response):
    """Marshal the response JSON into a BitbucketAttribute object.

    Args:
        response (requests.Response): the incoming response

    Returns:
        BitbucketAttribute

    Raises:
        ValueError: if the body is not valid JSON.
    """
    return response.json(object_hook=BitbucketAttribute)


def raise_for_errors(response):
    """Raise a RequestError carrying the raw body if the response is an error."""
    log.debug("%s response: %s - %s", response.request.method, response.status_code, response.reason)
    if not response.ok:
        raise RequestError(response.text, response.status_code, response)
