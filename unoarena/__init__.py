"""UNO arena: a UNO game engine with pluggable players."""
