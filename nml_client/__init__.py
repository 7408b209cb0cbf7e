"""Language client bootstrap for the nml tooling."""

__version__ = "0.1.0"
