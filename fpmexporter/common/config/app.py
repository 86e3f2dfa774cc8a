# -*- coding: utf-8 -*-
import os

from fpmexporter.common.config.abstract import AbstractConfig

__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"


class Config(AbstractConfig):
    filename = None

    config = dict(
        phpfpm=dict(
            addresses='tcp://127.0.0.1:9000',
            timeout=3.0,
        ),
    )

    config_changes = dict()

    def __init__(self, *args, **kwargs):
        super(Config, self).__init__(*args, **kwargs)
        self.apply(self.config_changes)

    @property
    def addresses(self):
        """
        Pool addresses from [phpfpm] addresses, comma separated in the file
        """
        raw = self.config['phpfpm'].get('addresses') or ''
        if isinstance(raw, (list, tuple)):
            return list(raw)
        return [address.strip() for address in raw.split(',') if address.strip()]

    @property
    def timeout(self):
        return float(self.config['phpfpm']['timeout'])


class DevelopmentConfig(Config):
    config_changes = dict(
        phpfpm=dict(
            addresses='tcp://%s:%s' % (
                os.environ.get('PHPFPM_HOST', 'phpfpm'),
                os.environ.get('PHPFPM_PORT', 9000)
            ),
        ),
    )


class ProductionConfig(Config):
    pass
