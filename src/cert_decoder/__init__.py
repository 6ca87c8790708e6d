"""
cert_decoder — PEM/X.509 certificate decoder.

Takes a PEM-encoded certificate submitted as text, decodes it and produces a
normalized, human-readable CertificateSummary. It describes what is inside the
certificate and makes no claim about whether the certificate can be trusted.

Built on the Railway-Oriented Programming (ROP) framework for
explicit, composable, functional error handling.
"""

__version__ = "0.1.0"
