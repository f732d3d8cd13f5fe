"""Hygienist Visit Tracker package.

This package is organized by feature modules (patients, hygienists, visits,
reports, ...) with a thin Flask controller layer over service/repository
layers and a framework-independent form validation engine.
"""

__version__ = "0.1.0"
