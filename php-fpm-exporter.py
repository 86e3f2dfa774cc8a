#!/usr/bin/python3
# -*- coding: utf-8 -*-
import sys


__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"
__credits__ = []  # check fpmexporter/main.py for the actual credits list


# import gevent and make appropriate patches
from gevent import monkey
monkey.patch_all()

# run the main script
from fpmexporter import main
sys.exit(main.run())
