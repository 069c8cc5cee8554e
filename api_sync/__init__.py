"""Contract sync tools: generate typed TypeScript API clients from route contracts."""

__version__ = "0.1.0"
