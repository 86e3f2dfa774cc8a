# -*- coding: utf-8 -*-
import json
import logging
import struct

import gevent
import pytest
from gevent import socket
from gevent.server import StreamServer
from flup.client.fcgi_app import (
    Record, FCGI_PARAMS, FCGI_DATA, FCGI_STDOUT, FCGI_STDERR, FCGI_END_REQUEST
)

from fpmexporter.common.context import context
from fpmexporter.common.util import configreader


__author__ = "Grant Hulegaard"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Grant Hulegaard"
__email__ = "grant.hulegaard@nginx.com"


STATUS = {
    'pool': 'www',
    'process manager': 'dynamic',
    'start time': 1481069601,
    'start since': 62,
    'accepted conn': 7,
    'listen queue': 0,
    'max listen queue': 1,
    'listen queue len': 128,
    'idle processes': 1,
    'active processes': 1,
    'total processes': 2,
    'max active processes': 2,
    'max children reached': 0,
    'slow requests': 3,
    'processes': [
        {
            'pid': 37,
            'state': 'Idle',
            'start time': 1481069601,
            'start since': 62,
            'requests': 4,
            'request duration': 183,
            'request method': 'GET',
            'request uri': '/index.php',
            'content length': 0,
            'user': '-',
            'script': '/var/www/index.php',
            'last request cpu': 0.0,
            'last request memory': 2097152,
        },
        {
            'pid': 38,
            'state': 'Running',
            'start time': 1481069601,
            'start since': 62,
            'requests': 3,
            'request duration': 217,
            'request method': 'GET',
            'request uri': '/status?json&full',
            'content length': 0,
            'user': '-',
            'script': '-',
            'last request cpu': 0.0,
            'last request memory': 0,
        },
    ],
}

STATUS_PAYLOAD = json.dumps(STATUS).encode('utf-8')


def decode_params(data):
    """
    FastCGI name-value pairs: 1 or 4 byte lengths, then name, then value
    """
    params, pos = {}, 0
    while pos < len(data):
        lengths = []
        for _ in range(2):
            if data[pos] >> 7:
                lengths.append(struct.unpack('!L', data[pos:pos + 4])[0] & 0x7fffffff)
                pos += 4
            else:
                lengths.append(data[pos])
                pos += 1
        name = data[pos:pos + lengths[0]]
        pos += lengths[0]
        value = data[pos:pos + lengths[1]]
        pos += lengths[1]
        params[name.decode('latin-1')] = value.decode('latin-1')
    return params


def write_record(sock, record_type, data=b''):
    rec = Record(record_type, 1)
    rec.contentData = data
    rec.contentLength = len(data)
    rec.write(sock)


class FakeFPM(object):
    """
    Answers FastCGI requests the way a php-fpm status page does
    """
    def __init__(self, body=STATUS_PAYLOAD, status=None, delay=0, close_early=False, stderr=b''):
        self.body = body
        self.status = status
        self.delay = delay
        self.close_early = close_early
        self.stderr = stderr

        self.requests = []
        self.server = None
        self.address = None

    def handle(self, sock, address):
        params = b''
        while True:
            rec = Record()
            rec.read(sock)
            if rec.type == FCGI_PARAMS:
                params += rec.contentData or b''
            elif rec.type == FCGI_DATA:
                break
        self.requests.append(decode_params(params))

        if self.delay:
            gevent.sleep(self.delay)

        headers = b'X-Powered-By: PHP/7.0.8\r\n'
        if self.status is not None:
            headers += b'Status: ' + self.status.encode('latin-1') + b'\r\n'
        headers += b'Content-type: application/json\r\n\r\n'

        try:
            if self.close_early:
                write_record(sock, FCGI_STDOUT, headers + self.body[:10])
                return

            if self.stderr:
                write_record(sock, FCGI_STDERR, self.stderr)
            write_record(sock, FCGI_STDOUT, headers + self.body)
            write_record(sock, FCGI_STDOUT)
            write_record(sock, FCGI_END_REQUEST, struct.pack('!LB3x', 0, 0))
        except socket.error:
            # the client gave up already
            pass


@pytest.fixture
def fpm():
    servers = []

    def start(listener=None, **kwargs):
        app = FakeFPM(**kwargs)
        server = StreamServer(listener or ('127.0.0.1', 0), app.handle)
        server.start()
        servers.append(server)

        app.server = server
        if listener is None:
            app.address = 'tcp://127.0.0.1:%s' % server.server_port
        else:
            app.address = 'unix://%s' % listener.getsockname()
        return app

    yield start

    for server in servers:
        server.stop(timeout=0.1)


@pytest.fixture
def unix_listener(tmp_path):
    listener = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    listener.bind(str(tmp_path / 'www.sock'))
    listener.listen(16)
    yield listener
    listener.close()


class CapturingLog(object):
    """
    Sink with the logger capability set that keeps everything it is given
    """
    def __init__(self):
        self.messages = []

    def _record(self, level, msg, *args, **kwargs):
        self.messages.append((level, msg % args if args else msg))

    def debug(self, msg, *args, **kwargs):
        self._record('debug', msg, *args)

    def info(self, msg, *args, **kwargs):
        self._record('info', msg, *args)

    def error(self, msg, *args, **kwargs):
        self._record('error', msg, *args)

    def errors(self):
        return [msg for level, msg in self.messages if level == 'error']


@pytest.fixture
def log():
    previous = context.log
    sink = CapturingLog()
    context.set_logger(sink)
    yield sink
    context.set_logger(previous)


@pytest.fixture(autouse=True)
def clean_context():
    previous_log, previous_config = context.default_log, context.app_config
    root = logging.getLogger()
    root_handlers, root_level = root.handlers[:], root.level
    app_log = logging.getLogger('exporter-default')
    app_handlers, app_level, app_propagate = app_log.handlers[:], app_log.level, app_log.propagate
    yield
    root.handlers[:] = root_handlers
    root.setLevel(root_level)
    app_log.handlers[:] = app_handlers
    app_log.setLevel(app_level)
    app_log.propagate = app_propagate
    context.set_logger(previous_log)
    context.app_config = previous_config
    configreader.CONFIG_CACHE.clear()
