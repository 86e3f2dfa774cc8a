# -*- coding: utf-8 -*-
from setuptools import setup, find_packages

__author__ = "Mike Belov"
__copyright__ = "Copyright (C) Nginx, Inc. All rights reserved."
__license__ = ""
__maintainer__ = "Mike Belov"
__email__ = "dedm@nginx.com"


setup(
    name="php-fpm-exporter",
    version="1.0.0",
    author="Mike Belov",
    author_email="dedm@nginx.com",
    description="PHP-FPM pool status scraper",
    keywords="php-fpm fastcgi status exporter",
    packages=find_packages(
        exclude=[
            "*.tests", "*.tests.*", "tests.*", "tests",
        ]
    ),
    python_requires=">=3.7",
    install_requires=[
        'gevent',
        'flup>=1.0.3',
        'ujson',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    data_files=[
        ('etc/php-fpm-exporter/', [
            'etc/php-fpm-exporter.conf.default',
        ]),
    ],
    scripts=[
        'php-fpm-exporter.py'
    ],
    entry_points={
        'console_scripts': [
            'php-fpm-exporter = fpmexporter.main:main',
        ],
    },
    long_description='Scrapes PHP-FPM pool status pages over FastCGI',
)
