"""
tidydir - extension-based directory organizer

Groups the immediate files of a directory into per-extension folders,
idempotently, without ever overwriting or deleting a file.
"""

from tidydir.core import DirectoryOrganizer, OrganizeReport, Outcome, organize_directory
from tidydir.shared.constants import Application
from tidydir.shared.errors import DirectoryNotFoundError

__version__ = Application.VERSION

__all__ = [
    "DirectoryNotFoundError",
    "DirectoryOrganizer",
    "OrganizeReport",
    "Outcome",
    "organize_directory",
]
