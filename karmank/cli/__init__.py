"""KarmAnk command line interface package.

Run with ``python -m karmank.cli`` or the ``karmank`` console script.
"""
