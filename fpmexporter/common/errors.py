# -*- coding: utf-8 -*-


__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"


class ExporterException(Exception):
    description = 'Something really bad happened'

    def __init__(self, message=None, payload=None):
        Exception.__init__(self)
        self.message = message
        self.payload = payload

    def __str__(self):
        return "(message=%s, payload=%s)" % (self.message, self.payload)


class ExporterConfigException(ExporterException):
    description = "Couldn't load the config"
