"""Stencil - template selection and disambiguation."""

__version__ = "0.1.0"
