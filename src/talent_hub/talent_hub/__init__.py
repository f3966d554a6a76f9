"""Talent Hub package.

This package is organized by feature modules (organization, users,
registration, evaluations, development) with a thin Flask controller layer
and service/repository layers underneath.
"""
