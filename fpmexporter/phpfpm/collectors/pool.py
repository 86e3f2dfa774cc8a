# -*- coding: utf-8 -*-
import time

from fpmexporter.common.context import context
from fpmexporter.phpfpm.errors import ScrapeException
from fpmexporter.phpfpm.util import status
from fpmexporter.phpfpm.util.fpmstatus import PHPFPMStatus


__author__ = "Grant Hulegaard"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Grant Hulegaard"
__email__ = "grant.hulegaard@nginx.com"


class PHPFPMPoolStatusCollector(object):
    """
    Status collector.  Spawned per pool.  Queries the status page and swaps
    the decoded result into the pool object.
    """
    short_name = 'phpfpm_pool_status'

    def __init__(self, object=None):
        self.object = object

    def collect(self):
        """
        One scrape attempt.  Failures are recorded on the pool, not raised.

        :return: ScrapeException or None
        """
        start_time = time.time()
        try:
            values = self.collect_status_page()
        except ScrapeException as e:
            self.handle_exception(e)
            return e
        except Exception as e:
            error = ScrapeException(
                message='%s: %s' % (e.__class__.__name__, e),
                payload={'address': self.object.address}
            )
            self.handle_exception(error)
            context.log.debug('additional info:', exc_info=True)
            return error
        finally:
            context.log.debug(
                '%s collect in %.3f' % (self.object.address, time.time() - start_time)
            )

        self.object.apply_status(values)
        self.object.scrape_error = None
        return None

    def collect_status_page(self):
        """
        :return: dict decoded status page values
        :raises: ScrapeException
        """
        status_page = PHPFPMStatus(self.object.address, timeout=self.object.timeout)
        content = status_page.get_status()

        context.log.debug('pool[%s]: %s' % (self.object.address, content.decode('utf-8', 'replace')))

        return status.decode(content)

    def handle_exception(self, exception):
        self.object.scrape_error = exception
        self.object.scrape_failures += 1

        context.log.error('%s failed to collect from "%s": %s raised %s' % (
            self.short_name, self.object.address, exception.__class__.__name__, exception
        ))
