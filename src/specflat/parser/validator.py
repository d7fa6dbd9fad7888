"""Check a decoded document against the Swagger 2.0 meta-schema.

Validation is delegated to :mod:`openapi_spec_validator`.  Its detailed
diagnostics are not surfaced in the error message; callers get a single
fixed message and can reach the original error through ``__cause__``.

The validator works on a deep copy, so the caller's document is never
mutated.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from openapi_spec_validator import validate
from openapi_spec_validator.validation.exceptions import (
    OpenAPIValidationError,
    ValidatorDetectError,
)
from referencing.exceptions import Unresolvable

from specflat.exceptions import SpecConformanceError

logger = logging.getLogger(__name__)

CONFORMANCE_MESSAGE = "does not conform to swagger specification"


def ensure_valid(document: dict[str, Any]) -> None:
    """Raise unless *document* is a valid Swagger/OpenAPI description.

    Raises:
        SpecConformanceError: If the document fails validation, holds a
            ``$ref`` that does not resolve, or its version cannot be detected.
    """
    try:
        validate(copy.deepcopy(document))
    except (OpenAPIValidationError, ValidatorDetectError, Unresolvable) as exc:
        logger.debug("validation failed: %s", exc)
        raise SpecConformanceError(CONFORMANCE_MESSAGE) from exc
    logger.debug("successfully validated against schema")
