# local_careers/errors.py
from typing import List, Optional


class LocalCareersError(Exception):
    """Base class for every error raised by the pipeline."""


class ConfigurationError(LocalCareersError):
    """Missing credential, missing feed URL, or nothing to geocode."""


class UpstreamError(LocalCareersError):
    """A feed or the geocoding service failed or answered garbage."""


class JobValidationError(LocalCareersError):
    def __init__(self, missing: List[str], message: Optional[str] = None):
        self.missing = list(missing)
        super().__init__(message or f"Missing required fields: {', '.join(self.missing)}")


class EmptyImportError(LocalCareersError):
    """An import produced nothing worth storing."""


class StoreError(LocalCareersError):
    pass
