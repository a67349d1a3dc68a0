"""
Transcription schemes turning a continuous-time problem into NLP vectors.
"""

from .base import TranscriptionScheme, TranscriptionSettings, evaluate_defects
from .factory import available_schemes, create_transcription, parse_scheme_identifier
from .lgr import LegendreGaussRadau
from .quadrature import integrate
from .trapezoidal import Trapezoidal


__all__ = [
    "LegendreGaussRadau",
    "TranscriptionScheme",
    "TranscriptionSettings",
    "Trapezoidal",
    "available_schemes",
    "create_transcription",
    "evaluate_defects",
    "integrate",
    "parse_scheme_identifier",
]
