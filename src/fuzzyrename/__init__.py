"""fuzzyrename - Renommage de fichiers par correspondance approximative de noms."""

from fuzzyrename.config import ConfigError, ConfigFileError, FuzzyRenameError
from fuzzyrename.io_fs import FileAccessError
from fuzzyrename.matching.index import MatchIndexError

__all__ = [
    "__version__",
    "FuzzyRenameError",
    "ConfigError",
    "ConfigFileError",
    "FileAccessError",
    "MatchIndexError",
]

__version__ = "0.1.0"
