"""Internal pygit2 constants - keeps trivia out of public modules."""

from __future__ import annotations

from pygit2.enums import BlameFlag, DeltaStatus, DiffFind, DiffFlag, DiffOption, FileMode

# Blob modes eligible for blame (regular and executable files)
BLOB_MODES = frozenset({int(FileMode.BLOB), int(FileMode.BLOB_EXECUTABLE)})

# Diff file flags
FLAG_BINARY = int(DiffFlag.BINARY)
FLAG_EXISTS = int(DiffFlag.EXISTS)

# Diff options
DIFF_IGNORE_SUBMODULES = DiffOption.IGNORE_SUBMODULES

# Rename detection, independent of the diff.renames config
DIFF_FIND_RENAMES = DiffFind.FIND_RENAMES

# Blame options
BLAME_USE_MAILMAP = BlameFlag.USE_MAILMAP

# Delta status codes
DELTA_ADDED = int(DeltaStatus.ADDED)
DELTA_DELETED = int(DeltaStatus.DELETED)
DELTA_MODIFIED = int(DeltaStatus.MODIFIED)
DELTA_RENAMED = int(DeltaStatus.RENAMED)
DELTA_COPIED = int(DeltaStatus.COPIED)
