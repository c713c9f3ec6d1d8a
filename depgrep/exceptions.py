class DepGrepError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(DepGrepError):
    # errors related to configuration.
    pass

class DiscoveryError(DepGrepError):
    # errors during dependency discovery.
    pass

class MissingRootError(DepGrepError):
    # no project root was supplied; nothing is traversed.
    pass

class EmptySearchTextError(DepGrepError):
    # the search text was missing or empty.
    pass

class OutputError(DepGrepError):
    # errors during output operations.
    pass

class OpenFileError(DepGrepError):
    # a selected file could not be opened for editing.
    pass
