"""Church attendance package.

This package is organized by feature modules (profiles, attendance, stats, ...)
with a thin Flask controller layer over service/repository layers.
"""
