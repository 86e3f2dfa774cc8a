# -*- coding: utf-8 -*-
from fpmexporter.common.errors import ExporterException


__author__ = "Grant Hulegaard"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Grant Hulegaard"
__email__ = "grant.hulegaard@nginx.com"


class ScrapeException(ExporterException):
    description = 'Failed to scrape php-fpm pool'


class AddressError(ScrapeException):
    description = 'Malformed or unsupported pool address'


class ConnectError(ScrapeException):
    description = 'Failed to connect to pool'


class TransportError(ScrapeException):
    description = 'Failed to communicate with pool'


class DecodeError(ScrapeException):
    description = 'Failed to decode pool status'

    def __init__(self, message=None, payload=None, offset=None, field=None):
        super(DecodeError, self).__init__(message=message, payload=payload)
        self.offset = offset
        self.field = field

    def __str__(self):
        where = []
        if self.field is not None:
            where.append('field="%s"' % self.field)
        if self.offset is not None:
            where.append('offset=%s' % self.offset)
        return "(message=%s%s)" % (self.message, ''.join(', %s' % w for w in where))
