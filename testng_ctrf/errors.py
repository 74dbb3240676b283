"""Exceptions raised by the TestNG to CTRF conversion pipeline."""


class ConversionError(Exception):
    """Base class for conversion failures."""


class StructureError(ConversionError):
    """The TestNG document is unparseable or lacks a required element."""
