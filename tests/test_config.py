# -*- coding: utf-8 -*-
import logging
import os

import pytest

import fpmexporter
from fpmexporter.common.config.app import Config, DevelopmentConfig, ProductionConfig
from fpmexporter.common.context import context
from fpmexporter.common.errors import ExporterConfigException
from fpmexporter.common.util import configreader


__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"


DEFAULT_CONFIG = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'etc', 'php-fpm-exporter.conf.default'
)


class TestConfig(object):

    def test_defaults(self):
        config = Config()
        assert config.addresses == ['tcp://127.0.0.1:9000']
        assert config.timeout == 3.0
        assert config.from_logging is False

    def test_file(self, tmp_path):
        conf = tmp_path / 'exporter.conf'
        conf.write_text(
            '[phpfpm]\n'
            'addresses = tcp://127.0.0.1:9000, unix:///run/php/www.sock,\n'
            'timeout = 1.5\n'
        )
        config = Config(str(conf))

        assert config.addresses == ['tcp://127.0.0.1:9000', 'unix:///run/php/www.sock']
        assert config.timeout == 1.5

    def test_defaults_not_shared(self, tmp_path):
        conf = tmp_path / 'exporter.conf'
        conf.write_text('[phpfpm]\naddresses = tcp://10.0.0.1:9000\n')
        Config(str(conf))

        assert Config().addresses == ['tcp://127.0.0.1:9000']

    def test_default_file(self):
        config = Config(DEFAULT_CONFIG)

        assert config.from_logging is True
        assert config.addresses == ['tcp://127.0.0.1:9000']
        assert 'loggers' not in config.config
        assert 'logger_root' not in config.config

    def test_apply(self):
        config = Config()
        changes = config.apply({'phpfpm': {'timeout': 5.0, 'extra': 'x'}})
        assert changes == 2
        assert config.timeout == 5.0


class TestConfigReader(object):

    def test_read_by_environment(self):
        config = configreader.read('app')
        assert isinstance(config, ProductionConfig)
        assert configreader.read('app') is config

    def test_read_development(self, monkeypatch):
        monkeypatch.setattr(context, 'environment', 'development')
        config = configreader.read('app')

        assert isinstance(config, DevelopmentConfig)
        assert config.filename is None
        assert config.addresses[0].startswith('tcp://')

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(ExporterConfigException):
            configreader.read('app', config_file=str(tmp_path / 'nope.conf'))

    def test_configtest(self, capsys):
        assert configreader.test(DEFAULT_CONFIG) == 0
        assert 'tcp://127.0.0.1:9000' in capsys.readouterr().out

    def test_configtest_no_addresses(self, tmp_path, capsys):
        conf = tmp_path / 'exporter.conf'
        conf.write_text('[phpfpm]\naddresses =\n')
        assert configreader.test(str(conf)) == 1
        assert 'No pool addresses' in capsys.readouterr().out


class TestContext(object):

    def test_setup(self):
        context.setup(app='exporter', debug=True)

        assert isinstance(context.app_config, ProductionConfig)
        assert context.log is logging.getLogger('exporter-default')
        assert context.log.level == logging.DEBUG

    def test_set_logger(self, log):
        assert context.log is log
        context.log.error('pool %s failed', 'www')
        assert log.errors() == ['pool www failed']

    def test_null_sink(self):
        silent = logging.getLogger('php-fpm-exporter-test-null')
        silent.addHandler(logging.NullHandler())
        silent.propagate = False

        context.set_logger(silent)
        assert context.log is silent

    def test_package_set_logger(self, log):
        silent = logging.getLogger('php-fpm-exporter-test-package')
        fpmexporter.set_logger(silent)
        assert context.log is silent

        fpmexporter.set_logger(log)
        context.log.error('pool %s failed', 'www')
        assert log.errors() == ['pool www failed']
