# -*- coding: utf-8 -*-
from fpmexporter.common.context import context
from fpmexporter.phpfpm.objects.pool import PROCESS_STATE_IDLE, PROCESS_STATE_RUNNING


__author__ = "Grant Hulegaard"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Grant Hulegaard"
__email__ = "grant.hulegaard@nginx.com"


def calculate_process_scoreboard(pool):
    """
    Count active and idle workers from the pool's process list.

    Processes in any other state are left out of every count (so total can
    be smaller than len(pool.processes)) and logged.

    :param pool: PHPFPMPoolObject
    :return: (int active, int idle, int total)
    """
    active, idle = 0, 0

    for process in pool.processes:
        if process.state == PROCESS_STATE_RUNNING:
            active += 1
        elif process.state == PROCESS_STATE_IDLE:
            idle += 1
        else:
            context.log.error(
                'unknown process state "%s" (pid %s, pool "%s")' % (process.state, process.pid, pool.address)
            )

    return active, idle, active + idle
