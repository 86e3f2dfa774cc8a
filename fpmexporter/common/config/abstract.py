# -*- coding: utf-8 -*-
import configparser
import copy

__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"


LOGGING_SECTIONS = ('loggers', 'handlers', 'formatters')


class AbstractConfig(object):
    filename = None
    config = dict()

    def __init__(self, config_file=None):
        # class level defaults are shared, work on a private copy
        self.config = copy.deepcopy(self.config)
        self.from_file = None
        if config_file:
            self.filename = config_file
        if self.filename:
            self.load()

    @property
    def from_logging(self):
        """
        True if the loaded file also carries logging.config.fileConfig sections
        """
        if self.from_file is None:
            return False
        return all(self.from_file.has_section(section) for section in LOGGING_SECTIONS)

    def load(self):
        """
        Loads config from file and updates it
        """
        self.from_file = configparser.RawConfigParser()
        self.from_file.read(self.filename)

        patch = {}
        for section in self.from_file.sections():
            # logging sections belong to logging.config, not to us
            if section in LOGGING_SECTIONS or section.split('_', 1)[0] in ('logger', 'handler', 'formatter'):
                continue

            patch[section] = {}
            for (key, value) in self.from_file.items(section):
                patch[section][key] = value

        self.apply(patch)

    def get(self, section, default=None):
        if default is None:
            default = {}
        return self.config.get(section, default)

    def __getitem__(self, item):
        return self.config[item]

    def __setitem__(self, item, value):
        self.config[item] = value

    def apply(self, patch, current=None):
        """
        Recursively applies changes to config and return amount of changes.
        Does NOT save changes to disk.

        :param patch: patches to config
        :param current: current tree
        :return: amount of changes
        """
        changes = 0

        if current is None:
            current = self.config

        for k, v in patch.items():
            if k in current:
                if isinstance(v, dict) and isinstance(current[k], dict):
                    changes += self.apply(v, current[k])
                elif v != current[k]:
                    changes += 1
                    current[k] = v
            else:
                changes += 1
                current[k] = v

        return changes
