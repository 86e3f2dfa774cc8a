# -*- coding: utf-8 -*-
import logging
import logging.config


__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"

LOGGERS_CACHE = {}

LOG_FORMAT = '%(asctime)s [%(process)d] %(threadName)s %(levelname)s %(message)s'


def setup(logger_file):
    logging.config.fileConfig(logger_file, disable_existing_loggers=False)


def setup_default():
    """
    Fallback when the config file has no logging sections: log to stderr
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)


def get(log_name):
    """
    Creates logger object to specified log and caches it in LOGGERS_CACHE dict

    :param log_name: log name
    :return: logger object
    """
    if log_name not in LOGGERS_CACHE:
        logger = logging.getLogger(log_name)
        LOGGERS_CACHE[log_name] = logger
    return LOGGERS_CACHE[log_name]


def get_debug_handler(log_file):
    """
    returns a file handler for debug log file
    :param log_file: str log file
    :return: FileHandler obj
    """
    handler = logging.FileHandler(log_file, 'a')
    formatter = logging.Formatter(LOG_FORMAT)
    handler.setFormatter(formatter)
    return handler
