# -*- coding: utf-8 -*-
from datetime import datetime, timezone

from fpmexporter.phpfpm.errors import DecodeError


__author__ = "Grant Hulegaard"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Grant Hulegaard"
__email__ = "grant.hulegaard@nginx.com"


# php-fpm writes 64 bit signed integers
INT_MIN, INT_MAX = -2 ** 63, 2 ** 63 - 1


class Timestamp(object):
    """
    Point in time as php-fpm puts it on the wire: bare seconds since the epoch
    (UTC), no quoting, no timezone.  Second precision only.
    """
    __slots__ = ('seconds',)

    def __init__(self, seconds=0):
        self.seconds = int(seconds)

    @classmethod
    def decode(cls, raw, field='start time'):
        """
        :param raw: int or str/bytes integer literal
        :return: Timestamp
        """
        if isinstance(raw, bool):
            raise DecodeError(message='expected epoch seconds, got %r' % raw, field=field)

        if isinstance(raw, int):
            return cls._checked(raw, field)

        if isinstance(raw, bytes):
            raw = raw.decode('ascii', 'replace')

        # literal integers only, like the status page writes them
        if isinstance(raw, str) and raw.strip().lstrip('-').isdigit():
            try:
                seconds = int(raw)
            except ValueError:
                raise DecodeError(message='expected epoch seconds, got a %s digit literal' % len(raw), field=field)
            return cls._checked(seconds, field)

        raise DecodeError(message='expected epoch seconds, got %r' % (raw,), field=field)

    @classmethod
    def _checked(cls, seconds, field):
        if not INT_MIN <= seconds <= INT_MAX:
            raise DecodeError(message='epoch seconds overflow a 64 bit integer', field=field)
        return cls(seconds)

    @classmethod
    def from_datetime(cls, dt):
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls(int(dt.timestamp()))

    def encode(self):
        return self.seconds

    @property
    def datetime(self):
        return datetime.fromtimestamp(self.seconds, tz=timezone.utc)

    def __int__(self):
        return self.seconds

    def __eq__(self, other):
        if isinstance(other, Timestamp):
            return self.seconds == other.seconds
        return NotImplemented

    def __hash__(self):
        return hash(self.seconds)

    def __repr__(self):
        return 'Timestamp(%s)' % self.seconds

    def __str__(self):
        try:
            return self.datetime.isoformat()
        except (ValueError, OverflowError, OSError):
            # valid epoch seconds, but past what datetime can hold
            return str(self.seconds)
