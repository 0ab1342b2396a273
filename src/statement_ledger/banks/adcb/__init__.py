"""ADCB (Abu Dhabi Commercial Bank) CSV statements."""

from .detector import detect_adcb_type
from .parsers import AdcbAccountParser, AdcbCreditCardParser

__all__ = ["detect_adcb_type", "AdcbAccountParser", "AdcbCreditCardParser"]
