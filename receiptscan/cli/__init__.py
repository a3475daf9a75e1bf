"""Unified command-line interface for receiptscan.

Usage:
    receiptscan parse <text_file>
    receiptscan parse - < ocr.txt
    receiptscan parse <text_file> --remote-url http://localhost:8002
    receiptscan serve [--host] [--port]
"""
