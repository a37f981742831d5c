"""gfshare: Shamir's Secret Sharing over GF(256).

Splits a byte string into n shares so that any k of them reconstruct it
and any k-1 reveal nothing about it.
"""

__version__ = "0.1.0"
