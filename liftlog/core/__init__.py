"""Core package: settings, enums, constants, logging."""
