"""Printer state and parameter enumerations."""
