# radaucol/transcription/factory.py
"""
Scheme selection by explicit identifier.
"""

import logging
import re

from ..exceptions import ConfigurationError
from ..utils.constants import DEFAULT_SCHEME
from .base import TranscriptionScheme, TranscriptionSettings
from .lgr import LegendreGaussRadau
from .trapezoidal import Trapezoidal


logger = logging.getLogger(__name__)

_SCHEMES: dict[str, type[LegendreGaussRadau] | type[Trapezoidal]] = {
    LegendreGaussRadau.name: LegendreGaussRadau,
    Trapezoidal.name: Trapezoidal,
}

# "legendre-gauss-radau-4" selects the scheme and overrides the degree
_DEGREE_SUFFIX = re.compile(r"^(?P<base>legendre-gauss-radau)-(?P<degree>\d+)$")


def available_schemes() -> list[str]:
    """Identifiers accepted by :func:`create_transcription` (without degree suffix)."""
    return sorted(_SCHEMES)


def parse_scheme_identifier(scheme: str) -> tuple[str, int | None]:
    """
    Split a scheme identifier into its base name and optional degree.

    Raises:
        ConfigurationError: If the identifier names no known scheme
    """
    if not isinstance(scheme, str):
        raise ConfigurationError(f"Scheme identifier must be string, got {type(scheme)}")

    identifier = scheme.strip().lower()
    match = _DEGREE_SUFFIX.match(identifier)
    if match is not None:
        return match.group("base"), int(match.group("degree"))
    if identifier in _SCHEMES:
        return identifier, None

    raise ConfigurationError(
        f"Unknown transcription scheme '{scheme}'",
        f"available: {', '.join(available_schemes())}",
    )


def create_transcription(
    settings: TranscriptionSettings, scheme: str = DEFAULT_SCHEME
) -> TranscriptionScheme:
    """
    Build the transcription named by ``scheme`` for ``settings``.

    Args:
        settings: Validated problem configuration
        scheme: ``"legendre-gauss-radau"``, ``"legendre-gauss-radau-<degree>"``
            or ``"trapezoidal"``

    Returns:
        A configured scheme whose tables are ready for repeated evaluation

    Raises:
        ConfigurationError: Unknown identifier or invalid degree suffix

    Examples:
        >>> settings = TranscriptionSettings(mesh=[0.0, 0.5, 1.0], num_states=2)
        >>> lgr = create_transcription(settings, "legendre-gauss-radau-4")
        >>> lgr.num_grid_points
        9
    """
    base_name, degree = parse_scheme_identifier(scheme)
    if degree is not None and degree != settings.degree:
        settings = settings.with_degree(degree)

    logger.debug("Selected transcription scheme '%s' (degree %d)", base_name, settings.degree)
    return _SCHEMES[base_name](settings)
