"""Report store errors."""


class ReportStoreError(Exception):
    """Base class for failures surfaced by the report and attachment stores."""

    kind = "store_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ReportNotFound(ReportStoreError):
    """A write targeted a report that does not exist."""

    kind = "not_found"

    def __init__(self, report_id):
        super().__init__(f"Report {report_id} not found")
        self.report_id = report_id


class StoreUnavailable(ReportStoreError):
    """The database or object store could not be reached or returned an error."""

    kind = "store_unavailable"


class StoreTimeout(StoreUnavailable):
    """A store call exceeded the configured timeout."""

    kind = "store_timeout"


class ConcurrentAllocationConflict(ReportStoreError):
    """Another writer claimed the same sequential number; the create can be retried."""

    kind = "allocation_conflict"


class MalformedSequenceValue(ValueError):
    """A stored sequential number does not have the PREFIX-YEAR-SEQ shape."""

    def __init__(self, value):
        super().__init__(f"Malformed sequential number: {value!r}")
        self.value = value
