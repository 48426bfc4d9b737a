"""Client toolkit for building and submitting LUMI program instructions."""

from .program_id import PROGRAM_ID

__version__ = "0.1.0"
