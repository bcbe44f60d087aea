__title__ = 'tagflags'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .descriptors import *
from .faults import *
from .grammar import *
from .help import *
from .scanner import *
from .table import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the descriptors
__all__ += descriptors.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the grammar
__all__ += grammar.__all__  # type: ignore[attr-defined]
# Load the exposed API of the help renderer
__all__ += help.__all__  # type: ignore[attr-defined]
# Load the exposed API of the scanner
__all__ += scanner.__all__  # type: ignore[attr-defined]
# Load the exposed API of the table builder
__all__ += table.__all__  # type: ignore[attr-defined]
