# -*- coding: utf-8 -*-
import sys
import traceback

from optparse import OptionParser, Option

__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx Inc. All rights reserved."
__credits__ = [
    "Mike Belov",
    "Grant Hulegaard",
]
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"


usage = "usage: %prog [get|configtest] [options]"

option_list = (
    Option(
        '--config',
        action='store',
        dest='config',
        type='string',
        help='path to the config file',
        default=None,
    ),
    Option(
        '--address',
        action='append',
        dest='addresses',
        type='string',
        help='pool address, e.g. tcp://127.0.0.1:9000 or unix:///run/php/www.sock (repeatable)',
        default=None,
    ),
    Option(
        '--timeout',
        action='store',
        dest='timeout',
        type='float',
        help='connect/response timeout in seconds',
        default=None,
    ),
    Option(
        '--format',
        action='store',
        dest='format',
        type='choice',
        choices=['json', 'text'],
        help='output format: json or text',
        default='json',
    ),
    Option(
        '--pretty',
        action='store_true',
        dest='pretty',
        help='pretty print json output',
        default=False,
    ),
    Option(
        '--log',
        action='store',
        dest='log',
        type='string',
        help='path to the log file',
        default=None,
    ),
    Option(
        '--debug',
        action='store_true',
        dest='debug',
        help='debug logging',
        default=False,
    ),
)

parser = OptionParser(usage, option_list=option_list)


def format_text(manager):
    from fpmexporter.phpfpm.scoreboard import calculate_process_scoreboard

    lines = []
    for pool in manager.pools:
        lines.append('%s' % pool.address)
        if pool.scrape_error is not None:
            lines.append('  error:                %s' % pool.scrape_error)
        lines.append('  scrape failures:      %s' % pool.scrape_failures)
        lines.append('  pool:                 %s' % pool.name)
        lines.append('  process manager:      %s' % pool.process_manager)
        lines.append('  start time:           %s' % pool.start_time)
        lines.append('  accepted conn:        %s' % pool.accepted_connections)
        lines.append('  listen queue:         %s' % pool.listen_queue)
        lines.append('  max listen queue:     %s' % pool.max_listen_queue)
        lines.append('  slow requests:        %s' % pool.slow_requests)

        active, idle, total = calculate_process_scoreboard(pool)
        lines.append('  scoreboard:           active=%s idle=%s total=%s' % (active, idle, total))
        lines.append('')

    return '\n'.join(lines)


def get(options):
    """
    Scrape every configured pool once and print the snapshot

    :return: int exit code, 1 if any pool failed
    """
    from fpmexporter.common.context import context
    from fpmexporter.phpfpm.managers.pool import PHPFPMPoolManager

    addresses = options.addresses or context.app_config.addresses
    timeout = options.timeout if options.timeout is not None else context.app_config.timeout

    manager = PHPFPMPoolManager(timeout=timeout)
    for address in addresses:
        manager.add(address)

    manager.update()

    if options.format == 'text':
        print(format_text(manager))
    else:
        print(manager.encode(pretty=options.pretty))

    return 1 if manager.failed else 0


def run(argv=None):
    """
    Exporter startup procedure
    Reads options, sets up the context, runs the action

    :param argv: list of str, defaults to sys.argv[1:]
    :return: int exit code
    """
    (options, args) = parser.parse_args(argv)

    try:
        action = args[0]
        if action not in ('get', 'configtest'):
            raise IndexError
    except IndexError:
        print("Invalid action or no action supplied\n")
        parser.print_help()
        return 1

    if action == 'configtest':
        from fpmexporter.common.util import configreader
        return configreader.test(options.config)

    from fpmexporter.common.context import context
    from fpmexporter.common.errors import ExporterConfigException
    try:
        context.setup(
            app='exporter',
            config_file=options.config,
            log_file=options.log,
            debug=options.debug,
        )
    except ExporterConfigException as e:
        print("\033[31m%s\033[0m\n" % e.message)
        return 1

    try:
        return get(options)
    except Exception:
        context.default_log.error('uncaught exception during run time', exc_info=True)
        traceback.print_exc()
        return 1


def main():
    sys.exit(run())


if __name__ == '__main__':
    main()
