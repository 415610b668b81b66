# stationflow/errors.py


class MalformedTimestampError(ValueError):
    """Timestamp is missing or could not be parsed (None / NaT)."""


class InvalidTimeFilterError(ValueError):
    """Time filter is not -1 or an integer minute in [0, 1439]."""
