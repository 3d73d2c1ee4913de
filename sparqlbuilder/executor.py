import logging

import requests

import sparqlbuilder

from sparqlbuilder.query import QueryBuilder
from sparqlbuilder.errors import EndpointError

log = logging.getLogger(__name__)


class QueryExecuter(object):
    """
    Sends queries to a remote SPARQL endpoint

    The query goes out as a GET parameter and the endpoint is asked
    for JSON, the decoded answer is returned as is.
    """

    def __init__(self, url, queryParam='query', formatParam='format',
                 userAgent=None, timeout=None, session=None):
        self.url = url
        self.queryParam = queryParam
        self.formatParam = formatParam
        self.userAgent = userAgent or sparqlbuilder.USER_AGENT
        self.timeout = timeout or sparqlbuilder.DEFAULT_TIMEOUT
        self.session = session or requests.Session()

    def execute(self, query):
        if isinstance(query, QueryBuilder):
            query = query.render()
        if not isinstance(query, str):
            raise TypeError('query has to be a string or a QueryBuilder, not %s'
                            % type(query).__name__)

        params = {self.queryParam: query, self.formatParam: 'json'}
        log.debug('GET %s %s', self.url, params)

        try:
            response = self.session.get(
                self.url, params=params,
                headers={'User-Agent': self.userAgent},
                timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise EndpointError('Request to %s failed: %s' % (self.url, e))

        log.debug('%s answered %s', self.url, response.status_code)
        if response.status_code >= 400:
            raise EndpointError('HTTP error: %s' % self.url,
                                response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise EndpointError('%s did not answer with JSON: %s'
                                % (self.url, e), response.status_code)
