# -*- coding: utf-8 -*-
from fpmexporter.common.context import context

from fpmexporter.phpfpm.errors import TransportError
from fpmexporter.phpfpm.util.inet import INET_IPV4, parse_address
from fpmexporter.phpfpm.util.fcgi import FCGIApp, DEFAULT_TIMEOUT


__author__ = "Grant Hulegaard"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Grant Hulegaard"
__email__ = "grant.hulegaard@nginx.com"


STATUS_PATH = '/status'


class PHPFPMStatus(object):
    """
    Query wrapper around FCGIApp.  Responsible for turning a pool address into
    a connection and asking the pool's status page for its full json report.
    """
    def __init__(self, address, timeout=DEFAULT_TIMEOUT):
        self.address = address
        self.timeout = timeout

        # raises AddressError
        self.connection = parse_address(address)

        self.env = {}
        self._setup_env()

    def _setup_env(self):
        """
        Setup environment variables to pass though CGI.  These are what the
        php-fpm status page expects, not something to tune.
        """
        self.env = {
            'SCRIPT_FILENAME': STATUS_PATH,
            'SCRIPT_NAME': STATUS_PATH,
            'SERVER_SOFTWARE': 'php-fpm-exporter',
            'REMOTE_ADDR': '127.0.0.1',
            'QUERY_STRING': 'json&full',
            'REQUEST_METHOD': 'GET',
            'CONTENT_LENGTH': '0',
        }

    def _connect(self):
        """
        FCGIApp doesn't open a socket until call.
        """
        if isinstance(self.connection, INET_IPV4):
            return FCGIApp(
                host=self.connection.host, port=self.connection.port, timeout=self.timeout
            )
        # a str is a path to a unix socket
        return FCGIApp(connect=self.connection, timeout=self.timeout)

    def get_status(self):
        """
        Hit the status page once.

        :return: bytes raw json body
        :raises: ConnectError, TransportError
        """
        fcgi = self._connect()
        status, headers, out, err = fcgi(self.env)

        if err:
            context.log.debug(
                'pool at "%s" wrote to stderr: %s' % (self.address, err.decode('utf-8', 'replace'))
            )

        if not status.startswith('200'):
            context.log.debug(
                'additional info:\n'
                '  status: %s\n'
                '  headers: %s\n'
                '  out: %s\n'
                % (status, headers, out)
            )
            raise TransportError(
                message='non-success returned by fcgi (status: %s)' % status,
                payload={'address': self.address, 'status': status}
            )

        return out
