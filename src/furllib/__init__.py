__version__ = "0.1"

from .errors import FurlError, IndexOutOfRangeError, InvalidOperationError, InvalidStateError, ParseError
from .fragment import Fragment
from .furl import DEFAULT_PORTS, Furl
from .omdict import OMDict
from .path import Path
from .query import Query
