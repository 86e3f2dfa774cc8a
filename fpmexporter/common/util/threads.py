# -*- coding: utf-8 -*-
import gevent

from fpmexporter.common.context import context

__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"


def spawn(f, *args, **kwargs):
    thread = gevent.spawn(f, *args, **kwargs)
    context.log.debug('started "%s"' % getattr(f, '__qualname__', f))
    return thread


def join(threads, timeout=None):
    """
    Wait for every greenlet to finish, regardless of how it finished

    :param threads: iterable of Greenlet
    :param timeout: float optional seconds to wait
    :return: list of Greenlet that finished
    """
    return gevent.joinall(threads, timeout=timeout, raise_error=False)
