class ConnectorInfrastructureError(Exception):
    """Base class for errors raised by the connector's adapters."""


class DataSourceError(ConnectorInfrastructureError):
    pass


class DataSourceNotFoundError(DataSourceError):
    pass


class DataParseError(DataSourceError):
    """An input file exists but could not be parsed."""


class DataValidationError(DataSourceError):
    """An input file parsed but does not describe item rows."""


class OdmSerializationError(ConnectorInfrastructureError):
    """A clinical data tree holds text that cannot be written as XML 1.0."""
