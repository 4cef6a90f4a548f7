"""Batch Attendance package.

Feature modules (schedules, attendance, members, escalation, ranking) each keep
their model, repository Protocol, MySQL repository and service side by side.
Flask controllers are a thin layer over the services.
"""
