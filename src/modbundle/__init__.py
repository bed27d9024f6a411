"""
modbundle - assemble one distributable ZIP from a mod kit plus add-on archives.
"""

__version__ = "0.3.0"
