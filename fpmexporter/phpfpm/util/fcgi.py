# -*- coding: utf-8 -*-
# Some elements of this module use the flup library and are based off of some
# modifications by Vladimir Rusinov (code referenced at
# https://gist.github.com/wofeiwo/3720207).  The copyright notice(s) thereof
# are included below.
#
# Copyright (c) 2006 Allan Saddi <allan@saddi.com>
# Copyright (c) 2011 Vladimir Rusinov <vladimir@greenmice.info>
# Copyright (c) 2016 Grant Hulegaard <grant.hulegaard@nginx.com>
# Copyright (c) 2016 Nginx, Inc.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
# 1. Redistributions of source code must retain the above copyright
#    notice, this list of conditions and the following disclaimer.
# 2. Redistributions in binary form must reproduce the above copyright
#    notice, this list of conditions and the following disclaimer in the
#    documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE AUTHOR AND CONTRIBUTORS ``AS IS'' AND
# ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED.  IN NO EVENT SHALL THE AUTHOR OR CONTRIBUTORS BE LIABLE
# FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
# DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS
# OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION)
# HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT
# LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY
# OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF
# SUCH DAMAGE.
#
#
import re

import gevent
from gevent import socket

from flup.client.fcgi_app import FCGIApp as FCGIApp_orig
from flup.client.fcgi_app import (
    Record, FCGI_BEGIN_REQUEST, struct, FCGI_BeginRequestBody, FCGI_RESPONDER,
    FCGI_BeginRequestBody_LEN, FCGI_STDIN, FCGI_DATA, FCGI_STDOUT, FCGI_STDERR,
    FCGI_END_REQUEST
)

from fpmexporter.phpfpm.errors import ConnectError, TransportError


__author__ = "Grant Hulegaard"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Grant Hulegaard"
__email__ = "grant.hulegaard@nginx.com"


DEFAULT_TIMEOUT = 3.0

_HEADER_RE = re.compile(r"^[A-Za-z0-9-]+\s*:")


class FCGIApp(FCGIApp_orig):
    """
    Minimal FastCGI responder client on top of flup's record framing.  One
    request per connection, no multiplexing, no WSGI.  Sockets come from
    gevent so a request only blocks its own greenlet.
    """

    def __init__(self, connect=None, host=None, port=None, timeout=DEFAULT_TIMEOUT):
        if host is not None:
            assert port is not None
            connect = (host, port)

        self._connect = connect
        self._timeout = timeout

    def __call__(self, environ):
        """
        :param environ: dict CGI params sent as FCGI_PARAMS
        :return: (str status, list headers, bytes out, bytes err)
        """
        sock = self._getConnection()

        try:
            with gevent.Timeout(self._timeout, TransportError(
                message='no response from %s within %ss' % (self.address, self._timeout),
                payload={'address': self.address}
            )):
                self._send_request(sock, environ)
                out, err = self._read_response(sock)
        except EOFError:
            raise TransportError(
                message='connection to %s closed before end of request' % self.address,
                payload={'address': self.address}
            )
        except socket.error as e:
            raise TransportError(
                message='failed to talk to %s: %s' % (self.address, e),
                payload={'address': self.address}
            )
        finally:
            # FCGI_KEEP_CONN is never set, the application closes its side too
            sock.close()

        status, headers, body = self._parse_headers(out)
        return status, headers, body, err

    @property
    def address(self):
        if isinstance(self._connect, tuple):
            return '%s:%s' % self._connect
        return self._connect

    def _send_request(self, sock, environ):
        # Since this is going to be the only request on this connection,
        # set the request ID to 1.
        requestId = 1

        rec = Record(FCGI_BEGIN_REQUEST, requestId)
        rec.contentData = struct.pack(FCGI_BeginRequestBody, FCGI_RESPONDER, 0)
        rec.contentLength = FCGI_BeginRequestBody_LEN
        rec.write(sock)

        self._fcgiParams(sock, requestId, environ)
        self._fcgiParams(sock, requestId, {})

        # empty FCGI_STDIN and FCGI_DATA streams, a status GET has no body
        for record_type in (FCGI_STDIN, FCGI_DATA):
            rec = Record(record_type, requestId)
            rec.contentData = b''
            rec.contentLength = 0
            rec.write(sock)

    @staticmethod
    def _read_response(sock):
        """
        Process FCGI_STDOUT, FCGI_STDERR, FCGI_END_REQUEST records from the
        application.
        """
        out, err = [], []
        while True:
            inrec = Record()
            inrec.read(sock)
            if inrec.type == FCGI_STDOUT:
                if inrec.contentData:
                    out.append(inrec.contentData)
            elif inrec.type == FCGI_STDERR:
                err.append(inrec.contentData)
            elif inrec.type == FCGI_END_REQUEST:
                break

        return b''.join(out), b''.join(err)

    @staticmethod
    def _parse_headers(out):
        """
        Split CGI response headers from the body.  The "Status" header is
        pulled out, anything else is returned as (lowercase name, value).
        """
        status = '200 OK'
        headers = []
        pos = 0
        while True:
            eolpos = out.find(b'\n', pos)
            if eolpos < 0:
                break
            line = out[pos:eolpos].strip().decode('latin-1')
            pos = eolpos + 1

            # Empty line signifies end of headers
            if not line:
                break

            if not _HEADER_RE.match(line):
                # not a header block at all, treat everything as body
                return status, [], out

            header, value = line.split(':', 1)
            header = header.strip().lower()
            value = value.strip()

            if header == 'status':
                status = value
                if status.find(' ') < 0:
                    # Append a dummy reason phrase if one was not provided
                    status += ' FCGIApp'
            else:
                headers.append((header, value))

        return status, headers, out[pos:]

    def _getConnection(self):
        try:
            if isinstance(self._connect, str):
                sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
                sock.settimeout(self._timeout)
                try:
                    sock.connect(self._connect)
                except socket.error:
                    sock.close()
                    raise
            else:
                sock = socket.create_connection(self._connect, timeout=self._timeout)
        except socket.error as e:
            raise ConnectError(
                message='failed to connect to %s: %s' % (self.address, e),
                payload={'address': self.address}
            )

        return sock
