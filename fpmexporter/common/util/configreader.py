# -*- coding: utf-8 -*-
import importlib
import os

from fpmexporter.common.context import context
from fpmexporter.common.errors import ExporterConfigException

__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"

CONFIG_CACHE = {}


def read(config_name, config_file=None):
    """
    Reads specified config and caches it in CONFIG_CACHE dict

    The config class is picked by environment, e.g. ProductionConfig from
    fpmexporter/common/config/app.py for config_name "app".

    :param config_name: str config name
    :param config_file: str config file name
    :return: config object
    """
    if config_file and (not os.path.isfile(config_file) or not os.access(config_file, os.R_OK)):
        raise ExporterConfigException(
            message='config file %s could not be found or opened' % config_file,
            payload={'config_file': config_file}
        )

    if config_name not in CONFIG_CACHE:
        module = importlib.import_module('fpmexporter.common.config.%s' % config_name)
        config_class = getattr(module, '%sConfig' % context.environment.title())
        CONFIG_CACHE[config_name] = config_class(config_file)

    return CONFIG_CACHE[config_name]


def test(config_filename):
    """
    Checks that the config loads and names at least one pool

    :param config_filename: str config file
    :return: int: 0 if everything is ok, 1 if something is wrong
    """
    print('')

    try:
        context.setup(app='exporter', config_file=config_filename)
    except ExporterConfigException as e:
        print("\033[31m%s\033[0m\n" % e.message)
        return 1

    addresses = context.app_config.addresses
    if not addresses:
        print("\033[31mNo pool addresses specified in %s\033[0m\n" % config_filename)
        print("Write pool addresses in [phpfpm][addresses], e.g. tcp://127.0.0.1:9000")
        return 1

    try:
        context.app_config.timeout
    except ValueError:
        print("\033[31mTimeout in [phpfpm][timeout] is not a number\033[0m\n")
        return 1

    for address in addresses:
        print("pool: %s" % address)

    context.log.info('config file is ok!')
    print("\033[32mConfig %s is OK\033[0m" % (config_filename or "defaults"))
    return 0
