# -*- coding: utf-8 -*-
import time

from fpmexporter.common.context import context
from fpmexporter.common.util.threads import spawn, join
from fpmexporter.phpfpm.objects.pool import PHPFPMPoolObject
from fpmexporter.phpfpm.util import status
from fpmexporter.phpfpm.util.fcgi import DEFAULT_TIMEOUT


__author__ = "Grant Hulegaard"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Grant Hulegaard"
__email__ = "grant.hulegaard@nginx.com"


class PHPFPMPoolManager(object):
    """
    Manager for php-fpm pools.  Holds every registered pool and scrapes all
    of them at once.

    add() and update() are not meant to interleave: register pools first,
    then scrape.
    """
    name = 'phpfpm_pool_manager'

    def __init__(self, timeout=DEFAULT_TIMEOUT):
        self.timeout = timeout
        self.pools = []

    def add(self, address):
        """
        Register a pool.  The address is only checked when it gets scraped.

        :param address: str pool uri, e.g. tcp://127.0.0.1:9000
        :return: PHPFPMPoolObject
        """
        pool = PHPFPMPoolObject(address, timeout=self.timeout)
        self.pools.append(pool)
        return pool

    def update(self):
        """
        Scrape every pool concurrently and wait for all of them.  Per-pool
        failures end up on the pools (scrape_error/scrape_failures).
        """
        started = time.time()

        threads = [spawn(pool.update) for pool in self.pools]
        join(threads)

        for thread in threads:
            if thread.exception is not None:
                context.log.error(
                    '%s scrape crashed: %s' % (self.name, thread.exception.__class__.__name__),
                    exc_info=thread.exc_info
                )

        context.log.debug(
            'updated %s pool(s) in %.3f' % (len(self.pools), time.time() - started)
        )

    @property
    def failed(self):
        return [pool for pool in self.pools if pool.scrape_error is not None]

    def to_dict(self):
        return {'pools': [pool.to_dict() for pool in self.pools]}

    def encode(self, pretty=False):
        return status.encode(self.to_dict(), pretty=pretty)
