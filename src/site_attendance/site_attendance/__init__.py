"""Site attendance package.

Feature modules (workers, attendance, payroll, reminders, ...) sit behind a thin
Flask controller layer; services depend on repository protocols so storage can
be swapped for tests.
"""
