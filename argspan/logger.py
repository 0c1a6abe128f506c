"""
Package logger.

All argspan modules log through the "argspan" logger; the library never
installs handlers, so output is entirely under the host application's control.
"""
import logging

logger = logging.getLogger("argspan")

__all__ = ("logger",)
