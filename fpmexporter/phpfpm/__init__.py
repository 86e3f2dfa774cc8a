# -*- coding: utf-8 -*-
from fpmexporter.phpfpm.errors import (
    ScrapeException, AddressError, ConnectError, TransportError, DecodeError
)
from fpmexporter.phpfpm.managers.pool import PHPFPMPoolManager
from fpmexporter.phpfpm.objects.pool import (
    PHPFPMPoolObject, PHPFPMProcess, PROCESS_STATE_IDLE, PROCESS_STATE_RUNNING
)
from fpmexporter.phpfpm.scoreboard import calculate_process_scoreboard


__author__ = "Grant Hulegaard"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Grant Hulegaard"
__email__ = "grant.hulegaard@nginx.com"
