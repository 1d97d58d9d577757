"""Shared constants and error types for tidydir."""

from __future__ import annotations
