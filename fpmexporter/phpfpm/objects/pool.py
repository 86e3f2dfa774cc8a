# -*- coding: utf-8 -*-
from fpmexporter.phpfpm.collectors.pool import PHPFPMPoolStatusCollector
from fpmexporter.phpfpm.util import status
from fpmexporter.phpfpm.util.fcgi import DEFAULT_TIMEOUT


__author__ = "Grant Hulegaard"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Grant Hulegaard"
__email__ = "grant.hulegaard@nginx.com"


PROCESS_STATE_IDLE = 'Idle'
PROCESS_STATE_RUNNING = 'Running'


class PHPFPMProcess(object):
    """
    One worker of a pool as reported by the "full" status page.
    """
    def __init__(self, **kwargs):
        for attr, value in status.zero_values(status.PROCESS_FIELDS).items():
            setattr(self, attr, kwargs.get(attr, value))

    def to_dict(self):
        return status.to_dict_fields(self, status.PROCESS_FIELDS)

    def __repr__(self):
        return 'PHPFPMProcess(pid=%s, state=%s)' % (self.pid, self.state)


class PHPFPMPoolObject(object):
    """
    A php-fpm pool reachable at one address.  Snapshot attributes mirror the
    status page, scrape_error/scrape_failures describe the last attempts.
    """
    def __init__(self, address, timeout=DEFAULT_TIMEOUT):
        self.address = address
        self.timeout = timeout

        self.scrape_error = None
        self.scrape_failures = 0  # lifetime tally, never reset

        for attr, value in status.zero_values(status.POOL_FIELDS).items():
            setattr(self, attr, value)
        self.processes = []

        self.collector = PHPFPMPoolStatusCollector(object=self)

    def update(self):
        """
        Scrape the pool once.  Never raises.

        :return: ScrapeException or None
        """
        return self.collector.collect()

    def apply_status(self, values):
        """
        Replace the snapshot with freshly decoded status page values.

        :param values: dict as returned by status.decode()
        """
        for attr, _, _ in status.POOL_FIELDS:
            setattr(self, attr, values[attr])
        self.processes = [PHPFPMProcess(**process) for process in values[status.PROCESSES_KEY]]

    def to_dict(self):
        return status.to_dict(self)

    def __repr__(self):
        return 'PHPFPMPoolObject(address=%s, name=%s)' % (self.address, self.name)
