# -*- coding: utf-8 -*-
import json

import ujson

from fpmexporter.phpfpm.errors import DecodeError
from fpmexporter.phpfpm.util.timestamp import Timestamp, INT_MIN, INT_MAX


__author__ = "Grant Hulegaard"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Grant Hulegaard"
__email__ = "grant.hulegaard@nginx.com"


STR, INT, FLOAT, TIMESTAMP = 'str', 'int', 'float', 'timestamp'

# (attribute, status page key, kind)
POOL_FIELDS = (
    ('name', 'pool', STR),
    ('process_manager', 'process manager', STR),
    ('start_time', 'start time', TIMESTAMP),
    ('start_since', 'start since', INT),
    ('accepted_connections', 'accepted conn', INT),
    ('listen_queue', 'listen queue', INT),
    ('max_listen_queue', 'max listen queue', INT),
    ('listen_queue_length', 'listen queue len', INT),
    ('idle_processes', 'idle processes', INT),
    ('active_processes', 'active processes', INT),
    ('total_processes', 'total processes', INT),
    ('max_active_processes', 'max active processes', INT),
    ('max_children_reached', 'max children reached', INT),
    ('slow_requests', 'slow requests', INT),
)

PROCESSES_KEY = 'processes'

PROCESS_FIELDS = (
    ('pid', 'pid', INT),
    ('state', 'state', STR),
    ('start_time', 'start time', INT),
    ('start_since', 'start since', INT),
    ('requests', 'requests', INT),
    ('request_duration', 'request duration', INT),
    ('request_method', 'request method', STR),
    ('request_uri', 'request uri', STR),
    ('content_length', 'content length', INT),
    ('user', 'user', STR),
    ('script', 'script', STR),
    ('last_request_cpu', 'last request cpu', FLOAT),
    ('last_request_memory', 'last request memory', INT),
)


def zero_value(kind):
    if kind == STR:
        return ''
    elif kind == FLOAT:
        return 0.0
    elif kind == TIMESTAMP:
        return Timestamp(0)
    return 0


def zero_values(fields):
    return dict((attr, zero_value(kind)) for attr, _, kind in fields)


def _convert(value, kind, field):
    """
    Check a parsed json value against the expected kind.  Booleans are ints
    to python, but not to us.
    """
    if kind == STR:
        if isinstance(value, str):
            return value
    elif kind == INT:
        if isinstance(value, int) and not isinstance(value, bool):
            if INT_MIN <= value <= INT_MAX:
                return value
            raise DecodeError(message='value overflows a 64 bit integer', field=field)
    elif kind == FLOAT:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return float(value)
            except OverflowError:
                raise DecodeError(message='value overflows a float', field=field)
    elif kind == TIMESTAMP:
        # on the wire this is a bare integer, a quoted one is a type mismatch
        if isinstance(value, int):
            return Timestamp.decode(value, field=field)

    raise DecodeError(
        message='cannot decode %s into %s' % (type(value).__name__, kind),
        field=field
    )


def _decode_fields(raw, fields, prefix=''):
    values = zero_values(fields)
    for attr, key, kind in fields:
        value = raw.get(key)
        # missing and null both leave the zero value
        if value is not None:
            values[attr] = _convert(value, kind, prefix + key)
    return values


def _load(payload):
    if isinstance(payload, bytes):
        try:
            text = payload.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodeError(message='payload is not valid utf-8', offset=e.start)
    else:
        text = payload

    try:
        # php-fpm does not escape control characters in request uris
        return json.loads(text, strict=False)
    except json.JSONDecodeError as e:
        offset = len(text[:e.pos].encode('utf-8'))
        raise DecodeError(message=e.msg, offset=offset)
    except (ValueError, RecursionError) as e:
        # digit limits on huge integers, nesting too deep for the parser
        raise DecodeError(message='%s: %s' % (e.__class__.__name__, e))


def decode(payload):
    """
    Decode a php-fpm "json&full" status page.

    Example payload::
        {"pool":"www","process manager":"dynamic","start time":1481069601,
         "start since":62,"accepted conn":1,"listen queue":0,...,
         "processes":[{"pid":37,"state":"Idle","start time":1481069601,...}]}

    :param payload: bytes or str status page body
    :return: dict attribute - value for the pool, with "processes" holding a
             list of attribute - value dicts, one per process
    """
    raw = _load(payload)

    if not isinstance(raw, dict):
        raise DecodeError(message='expected an object, got %s' % type(raw).__name__, offset=0)

    values = _decode_fields(raw, POOL_FIELDS)

    processes = []
    raw_processes = raw.get(PROCESSES_KEY)
    if raw_processes is not None:
        if not isinstance(raw_processes, list):
            raise DecodeError(message='expected an array of processes', field=PROCESSES_KEY)

        for idx, raw_process in enumerate(raw_processes):
            prefix = '%s[%s].' % (PROCESSES_KEY, idx)
            if not isinstance(raw_process, dict):
                raise DecodeError(message='expected a process object', field=prefix.rstrip('.'))
            processes.append(_decode_fields(raw_process, PROCESS_FIELDS, prefix=prefix))

    values[PROCESSES_KEY] = processes
    return values


def to_dict_fields(obj, fields):
    result = {}
    for attr, key, kind in fields:
        value = getattr(obj, attr)
        result[key] = value.encode() if kind == TIMESTAMP else value
    return result


def to_dict(pool):
    """
    Wire representation of a pool object, the same keys the status page uses
    """
    result = to_dict_fields(pool, POOL_FIELDS)
    result[PROCESSES_KEY] = [to_dict_fields(process, PROCESS_FIELDS) for process in pool.processes]
    return result


def encode(data, pretty=False):
    return ujson.dumps(data, indent=4 if pretty else 0, escape_forward_slashes=False)
