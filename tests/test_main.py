# -*- coding: utf-8 -*-
import json

from fpmexporter import main

from tests.conftest import STATUS


__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"


class TestMain(object):

    def test_no_action(self, capsys):
        assert main.run([]) == 1
        assert 'Invalid action' in capsys.readouterr().out

    def test_unknown_action(self, capsys):
        assert main.run(['start']) == 1

    def test_get_json(self, fpm, capsys):
        server = fpm()
        assert main.run(['get', '--address', server.address]) == 0

        out = capsys.readouterr().out
        assert json.loads(out) == {'pools': [STATUS]}

    def test_get_text(self, fpm, capsys):
        server = fpm()
        assert main.run(['get', '--address', server.address, '--format', 'text']) == 0

        out = capsys.readouterr().out
        assert 'pool:                 www' in out
        assert 'active=1 idle=1 total=2' in out

    def test_get_failure(self, fpm, capsys):
        server = fpm()
        rc = main.run([
            'get', '--address', server.address, '--address', 'tcp://127.0.0.1:1', '--format', 'text'
        ])
        assert rc == 1

        out = capsys.readouterr().out
        assert 'error:' in out
        assert 'scrape failures:      1' in out

    def test_get_from_config(self, fpm, tmp_path, capsys):
        server = fpm()
        conf = tmp_path / 'exporter.conf'
        conf.write_text('[phpfpm]\naddresses = %s\ntimeout = 2\n' % server.address)

        assert main.run(['get', '--config', str(conf), '--pretty']) == 0
        assert json.loads(capsys.readouterr().out)['pools'][0]['pool'] == 'www'

    def test_get_missing_config(self, tmp_path, capsys):
        assert main.run(['get', '--config', str(tmp_path / 'nope.conf')]) == 1
        assert 'could not be found' in capsys.readouterr().out

    def test_get_text_far_start_time(self, fpm, capsys):
        server = fpm(body=json.dumps(dict(STATUS, **{'start time': 10 ** 15})).encode('utf-8'))
        assert main.run(['get', '--address', server.address, '--format', 'text']) == 0

        out = capsys.readouterr().out
        assert 'start time:           1000000000000000' in out
