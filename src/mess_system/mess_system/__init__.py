"""Mess subscription backend.

This package is organized by feature modules (users, messes, plans,
subscriptions, attendance, dashboard) with a thin Flask controller layer over
service and repository layers wired together in ``container``.
"""
