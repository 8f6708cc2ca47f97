"""CACAO playbook models, workflow safety checks, execution reports and fin messages."""

__version__ = "1.0.0"