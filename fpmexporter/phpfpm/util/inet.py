# -*- coding: utf-8 -*-
from collections import namedtuple
from urllib.parse import urlsplit

from fpmexporter.phpfpm.errors import AddressError


__author__ = "Grant Hulegaard"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Grant Hulegaard"
__email__ = "grant.hulegaard@nginx.com"


INET_IPV4 = namedtuple('INET_IPV4', ['host', 'port'])

SCHEME_TCP = 'tcp'
SCHEME_UNIX = 'unix'


def parse_address(address):
    """
    Turn a pool address into something a socket can connect to.

        tcp://127.0.0.1:9000       -> INET_IPV4('127.0.0.1', 9000)
        unix:///run/php/www.sock   -> '/run/php/www.sock'

    :param address: str pool URI
    :return: INET_IPV4 for tcp, str path for unix sockets
    """
    if not isinstance(address, str) or '://' not in address:
        raise AddressError(message='"%s" is not a valid pool uri' % (address,), payload={'address': address})

    try:
        uri = urlsplit(address)
        scheme = uri.scheme.lower()

        if scheme == SCHEME_TCP:
            host, port = uri.hostname, uri.port  # .port raises ValueError
            if not host or port is None:
                raise ValueError('missing host or port')
            return INET_IPV4(host, port)
        elif scheme == SCHEME_UNIX:
            # unix:///path puts it in path, unix://path (sloppy) in netloc
            path = uri.path if not uri.netloc else uri.netloc + uri.path
            if not path:
                raise ValueError('missing socket path')
            return path
    except ValueError as e:
        raise AddressError(
            message='"%s" is not a valid pool uri: %s' % (address, e),
            payload={'address': address}
        )

    raise AddressError(
        message='unsupported scheme "%s" in "%s"' % (uri.scheme, address),
        payload={'address': address}
    )
