"""Masking utilities applied to debug log output."""

from .sanitizers import mask_email, mask_message, mask_secret

__all__ = ["mask_email", "mask_message", "mask_secret"]
