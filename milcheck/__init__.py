__title__ = 'milcheck'
__author__ = 'Pierre D.'
__license__ = 'MPL-2.0'
__description__ = 'Arch Linux mirror status and news checker'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.1.0"

from .flags import *
from .tokens import *
from .tokenizer import *
from .normalizer import *
from .parser import *
from .faults import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__description__",
    "__version__",
    "version_info"
)

# Load the exposed API of the flag declarations
__all__ += flags.__all__  # type: ignore[attr-defined]
# Load the exposed API of the tokens
__all__ += tokens.__all__  # type: ignore[attr-defined]
# Load the exposed API of the tokenizer and normalizer
__all__ += tokenizer.__all__  # type: ignore[attr-defined]
__all__ += normalizer.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parser facade
__all__ += parser.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
