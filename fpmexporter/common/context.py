# -*- coding: utf-8 -*-
import os

from fpmexporter import Singleton


__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"


class Context(Singleton):
    """
    Process wide state: the app config and the logger every component writes
    diagnostics to.  Set up once at startup, read everywhere else.
    """
    def __init__(self):
        self.environment = None
        self.app_name = None
        self.app_config = None
        self.default_log = None

        self.setup_environment()
        self._setup_default_log()

    def setup_environment(self):
        """
        Setup common environment vars
        """
        self.environment = os.environ.get('PHPFPM_EXPORTER_ENVIRONMENT', 'production')

    def setup(self, **kwargs):
        self._setup_app_config(**kwargs)
        self._setup_app_logs(**kwargs)

    def _setup_app_config(self, **kwargs):
        self.app_name = kwargs.get('app')
        app_config = kwargs.get('app_config')

        from fpmexporter.common.util import configreader
        if app_config is None:
            app_config = configreader.read('app', config_file=kwargs.get('config_file'))
        else:
            configreader.CONFIG_CACHE['app'] = app_config

        self.app_config = app_config

    def _setup_app_logs(self, **kwargs):
        """
        Setup app log file

        :param log_file: str override the default log file
        :param debug: bool force debug log if True
        """
        log_file = kwargs.get('log_file')
        debug_mode = kwargs.get('debug')

        from fpmexporter.common.util import logger
        if self.app_config is not None and self.app_config.from_logging:
            logger.setup(self.app_config.filename)
        else:
            logger.setup_default()
        self.default_log = logger.get('%s-default' % self.app_name)

        if log_file:
            for handler in list(self.default_log.handlers):
                self.default_log.removeHandler(handler)
            self.default_log.addHandler(logger.get_debug_handler(log_file))
            self.default_log.propagate = False

        if debug_mode:
            self.default_log.setLevel(logger.logging.DEBUG)

    def _setup_default_log(self):
        from fpmexporter.common.util import logger
        self.default_log = logger.get('php-fpm-exporter-default')

    def set_logger(self, log):
        """
        Swap the process wide diagnostic sink.  Anything with the
        info/debug/error methods of a logging.Logger will do.

        :param log: logger-like object
        """
        self.default_log = log

    @property
    def log(self):
        return self.default_log


context = Context()
