from __future__ import annotations


class DeviceDefinitionException(Exception):
    """Base exception class"""


class DefinitionError(DeviceDefinitionException):
    """A device definition is invalid"""


class MultipleDefinitionsMatchException(DeviceDefinitionException):
    """Multiple definitions match a device"""


class ConversionError(DeviceDefinitionException):
    """A value could not be converted"""


class UnsupportedValue(ConversionError):
    """The value is not one of the values the converter accepts"""


class EndpointNotFound(DeviceDefinitionException):
    """The device has no endpoint for the requested name or id"""


class ClusterNotFound(DeviceDefinitionException):
    """The endpoint has no cluster with the requested id"""
