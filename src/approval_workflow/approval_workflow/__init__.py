"""Approval Workflow package.

This package is organized by feature modules (principals, requests, audit,
approval) with a thin Flask controller layer and service/repository layers.
The approval state machine itself is pure and does no I/O.
"""
