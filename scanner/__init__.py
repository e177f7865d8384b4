"""Barcode and QR scanning of patient cards."""

from .session import (
    Decoder,
    FrameSource,
    LineSource,
    ScanSession,
    ScanSessionClosed,
    TextDecoder,
    normalize_scanned_code,
)

__all__ = [
    "Decoder",
    "FrameSource",
    "LineSource",
    "ScanSession",
    "ScanSessionClosed",
    "TextDecoder",
    "normalize_scanned_code",
]
