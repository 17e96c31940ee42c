#!/usr/bin/env python
"""
Test runner script for the whole project
Usage: python run_tests.py [app_label ...]
"""
import os
import sys
import django
from django.conf import settings
from django.test.utils import get_runner

APPS = [
    'fintracks.core',
    'fintracks.locations',
    'fintracks.catalog',
    'fintracks.parties',
    'fintracks.inventory',
    'fintracks.sales',
    'fintracks.purchasing',
    'fintracks.finance',
    'fintracks.reports',
    'fintracks.notifications',
]

if __name__ == "__main__":
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'fintracks.config.settings')
    django.setup()
    TestRunner = get_runner(settings)
    test_runner = TestRunner()
    failures = test_runner.run_tests(sys.argv[1:] or APPS)
    sys.exit(bool(failures))
