"""receiptscan: turn noisy receipt OCR text into structured receipt records."""

__version__ = "0.1.0"
