"""
Configuration Manager Module
============================

Responsibility:
- Centralized loading and validation of JSON configuration files.
- Enforcement of schema constraints and logical rules.
- Construction of stepwise training parameters and the storage identity.
"""

from .config_manager import ConfigurationManager

__all__ = ['ConfigurationManager']
