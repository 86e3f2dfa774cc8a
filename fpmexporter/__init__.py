# -*- coding: utf-8 -*-


__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"


class Singleton(object):
    """
    WARN: If you choose to use implied references (re-init), this object can
          still be marked for cleanup by the GC.  You must keep the reference
          counter > 0 at all times or you may have an unexpected clean up cause
          unexpected behavior.
    """
    _instance = None

    def __new__(cls):
        if not cls._instance:
            cls._instance = super(Singleton, cls).__new__(cls)
        return cls._instance


def set_logger(log):
    """
    Swap the process wide diagnostic sink, see Context.set_logger

    :param log: logger-like object with info/debug/error
    """
    from fpmexporter.common.context import context
    context.set_logger(log)
