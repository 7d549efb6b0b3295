"""Compile a small statement language to x86-64 NASM assembly."""

__version__ = "1.0.0"