"""Attendance Bot package.

Feature modules (attendance, leave, payroll, ...) sit behind a thin Flask
webhook; services decide, repositories map typed records onto a tabular store.
"""
